# app/services/sync.py

import threading
from typing import Literal, Optional

from pydantic import BaseModel

from app.services.logger import Logger
from app.services.session import TableEditSession, sort_records
from app.services.store import get_record_store

log = Logger('service-sync')


class SyncResult(BaseModel):
    status: Literal["saved", "error", "busy"]
    message: str
    count: Optional[int] = None


class SyncController:
    """Moves the collection between a record store and an edit session.

    Loads never fail. Saves report their outcome as a SyncResult and only
    one save may be in flight at a time.
    """
    def __init__(self, store=None, session: TableEditSession = None, reload_after_save: bool = True):
        self.store = store if store is not None else get_record_store()
        self.session = session if session is not None else TableEditSession()
        self.reload_after_save = reload_after_save
        self._save_lock = threading.Lock()

    @property
    def is_saving(self) -> bool:
        return self._save_lock.locked()

    def on_load(self) -> TableEditSession:
        records = self.store.list()
        self.session.load(sort_records(records))
        log.info(f"Loaded {len(records)} records")
        return self.session

    def on_save_requested(self) -> SyncResult:
        if not self._save_lock.acquire(blocking=False):
            log.warning("Save requested while another save is in flight")
            return SyncResult(status="busy", message="A save is already in progress.")

        try:
            payload = self.session.export_for_save()
            result = self.store.replace_all(payload)

            if not result.success:
                log.error(f"Save failed: {result.error}")
                return SyncResult(status="error", message=result.error or "An unknown error occurred")

            log.info(f"Saved {result.accepted_count} records")
            if self.reload_after_save:
                self._reload(result.records)
        finally:
            self._save_lock.release()

        return SyncResult(status="saved", message="Data saved successfully!", count=result.accepted_count)

    def _reload(self, saved_records):
        # Prefer what the store confirmed it saved; a fresh list() can degrade to seed data
        if saved_records is not None:
            self.session.load(sort_records(saved_records))
            log.info(f"Reloaded {len(saved_records)} saved records")
        else:
            self.on_load()
