# app/services/session.py

import locale
import unicodedata
import uuid
from datetime import datetime
from typing import Callable, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from app.core.errors import FieldNameError, FieldValueError, NoteEditError, RowIndexError
from app.schemas.business import EDITABLE_FIELDS, BusinessRecord, ContactStage, NoteHistoryEntry
from app.services.logger import Logger

log = Logger('service-session')

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def sort_key(record: BusinessRecord):
    """Case-insensitive collation key on the business name.

    Accents are stripped for the primary key so 'Éclair' sorts with the E's
    whatever the process locale is; the casefolded name breaks ties.
    """
    name = (record.business_name or "").casefold()
    decomposed = unicodedata.normalize('NFKD', name)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (locale.strxfrm(base), locale.strxfrm(name))


def sort_records(records: Sequence[BusinessRecord]) -> List[BusinessRecord]:
    # sorted() is stable, so equal names keep their input order
    return sorted(records, key=sort_key)


class _Row:
    __slots__ = ("key", "record")

    def __init__(self, record: BusinessRecord):
        self.key = uuid.uuid4().hex
        self.record = record


class _NoteDraft:
    __slots__ = ("row_key", "text")

    def __init__(self, row_key: str, text: str):
        self.row_key = row_key
        self.text = text


class RecordView:
    """Filtered view over a session's rows. Every iteration starts over."""
    def __init__(self, session: "TableEditSession", query: str = ""):
        self._session = session
        self.query = query or ""

    def __iter__(self) -> Iterator[BusinessRecord]:
        needle = self.query.casefold()
        for row in list(self._session._rows):
            if not needle or needle in (row.record.business_name or "").casefold():
                yield row.record

    def __len__(self) -> int:
        return sum(1 for _ in self)


class TableEditSession:
    """The editable working copy of the business table.

    Rows are kept in insertion order. A note draft is tied to the row it was
    opened on through a row key, so inserts and deletes elsewhere do not move it.
    """
    def __init__(self, records: Sequence[BusinessRecord] = None, clock: Callable[[], datetime] = None):
        self._rows: List[_Row] = []
        self._draft: Optional[_NoteDraft] = None
        self._clock = clock or datetime.now
        self._last_timestamp = ""
        if records:
            self.load(records)

    def load(self, records: Sequence[BusinessRecord]):
        """Install a new working copy, discarding any open note draft."""
        self._rows = [_Row(record.model_copy(deep=True)) for record in records]
        self._draft = None
        log.debug(f"Loaded {len(self._rows)} records into session")

    @property
    def records(self) -> List[BusinessRecord]:
        return [row.record for row in self._rows]

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, row_index: int) -> BusinessRecord:
        return self._row(row_index).record

    def _row(self, row_index: int) -> _Row:
        if not isinstance(row_index, int) or row_index < 0 or row_index >= len(self._rows):
            raise RowIndexError(f"Row {row_index} is out of range (0-{len(self._rows) - 1})")
        return self._rows[row_index]

    def _row_by_key(self, key: str) -> Optional[_Row]:
        for row in self._rows:
            if row.key == key:
                return row
        return None

    def set_field(self, row_index: int, field_name: str, value: str):
        """Replace one attribute of one record."""
        row = self._row(row_index)
        attr = EDITABLE_FIELDS.get(field_name)
        if attr is None:
            raise FieldNameError(f"'{field_name}' is not an editable field")
        if not isinstance(value, str):
            raise FieldValueError(f"Value for '{field_name}' must be a string, got {type(value).__name__}")
        if attr == "contact_stage" and value not in ContactStage.values():
            raise FieldValueError(f"'{value}' is not a contact stage")

        try:
            setattr(row.record, attr, value)
        except ValidationError as e:
            raise FieldValueError(str(e)) from e

    def add_row(self) -> int:
        """Append an empty record and return its index."""
        self._rows.append(_Row(BusinessRecord()))
        return len(self._rows) - 1

    def delete_row(self, row_index: int) -> BusinessRecord:
        row = self._row(row_index)
        del self._rows[row_index]
        if self._draft is not None and self._draft.row_key == row.key:
            log.debug(f"Discarding note draft for deleted row {row_index}")
            self._draft = None
        return row.record

    @property
    def pending_note_edit(self) -> Optional[dict]:
        """The open draft as {'target_index', 'draft_text'}, or None."""
        if self._draft is None:
            return None
        for index, row in enumerate(self._rows):
            if row.key == self._draft.row_key:
                return {"target_index": index, "draft_text": self._draft.text}
        return None

    def begin_note_edit(self, row_index: int) -> str:
        """Open a draft on a record, seeded with its current notes."""
        row = self._row(row_index)
        self._draft = _NoteDraft(row.key, row.record.notes or "")
        return self._draft.text

    def update_note_draft(self, text: str):
        if self._draft is None:
            raise NoteEditError("No note edit in progress")
        self._draft.text = text

    def cancel_note_edit(self):
        self._draft = None

    def commit_note_edit(self, text: str = None) -> NoteHistoryEntry:
        """Write the draft to the record it was opened on and log it in the note history."""
        if self._draft is None:
            raise NoteEditError("No note edit in progress")
        row = self._row_by_key(self._draft.row_key)
        if row is None:
            self._draft = None
            raise NoteEditError("The row this note was opened on no longer exists")

        note = self._draft.text if text is None else text
        entry = NoteHistoryEntry(note=note, timestamp=self._timestamp())
        row.record.notes = note
        row.record.note_history_entries = row.record.note_history_entries + [entry]
        self._draft = None
        return entry

    def _timestamp(self) -> str:
        stamp = self._clock().strftime(TIMESTAMP_FORMAT)
        # never go backwards, even if the wall clock does
        if stamp < self._last_timestamp:
            stamp = self._last_timestamp
        self._last_timestamp = stamp
        return stamp

    def search(self, query: str = "") -> RecordView:
        return RecordView(self, query)

    def export_for_save(self) -> List[BusinessRecord]:
        """All records, deep-copied and sorted by business name."""
        return sort_records([row.record.model_copy(deep=True) for row in self._rows])
