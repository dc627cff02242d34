import threading
from unittest.mock import MagicMock

from app.schemas.business import BusinessRecord
from app.schemas.core import SaveResult
from app.services.session import TableEditSession
from app.services.store import MemoryRecordStore, seed_records
from app.services.sync import SyncController


def zebra_and_acme():
    return [
        BusinessRecord(id="1", business_name="Zebra Co"),
        BusinessRecord(id="2", business_name="Acme"),
    ]


class TestOnLoad:
    def test_installs_sorted_records(self):
        controller = SyncController(store=MemoryRecordStore(zebra_and_acme()))
        session = controller.on_load()
        assert [r.business_name for r in session.records] == ["Acme", "Zebra Co"]

    def test_uses_seed_data_when_store_falls_back(self):
        controller = SyncController(store=MemoryRecordStore())
        session = controller.on_load()
        assert [r.business_name for r in session.records] == ["Bookworm Reads", "The Coffee Shop"]


class TestOnSaveRequested:
    def test_saves_edits_made_since_load(self):
        store = MemoryRecordStore(zebra_and_acme())
        controller = SyncController(store=store, reload_after_save=False)
        session = controller.on_load()
        session.set_field(0, "phone", "555-1111")
        session.delete_row(1)
        session.add_row()
        session.set_field(1, "businessName", "Brand New")

        result = controller.on_save_requested()

        assert result.status == "saved"
        assert result.count == 2
        stored = store.list()
        assert [r.business_name for r in stored] == ["Acme", "Brand New"]
        assert stored[0].phone == "555-1111"
        assert stored[1].id != ""

    def test_reload_after_save_picks_up_new_ids(self):
        controller = SyncController(store=MemoryRecordStore(zebra_and_acme()))
        session = controller.on_load()
        session.add_row()
        controller.on_save_requested()
        assert all(r.id for r in controller.session.records)

    def test_saved_records_kept_when_list_degrades(self):
        store = MagicMock()
        store.replace_all.return_value = SaveResult(
            success=True,
            accepted_count=1,
            records=[BusinessRecord(id="srv-1", business_name="My Real Customer")],
        )
        store.list.return_value = seed_records()
        controller = SyncController(store=store, session=TableEditSession([BusinessRecord(business_name="My Real Customer")]))

        result = controller.on_save_requested()

        assert result.status == "saved"
        assert [r.business_name for r in controller.session.records] == ["My Real Customer"]
        assert controller.session[0].id == "srv-1"
        store.list.assert_not_called()

    def test_reloads_from_store_when_save_returns_no_records(self):
        store = MagicMock()
        store.replace_all.return_value = SaveResult(success=True, accepted_count=2)
        store.list.return_value = zebra_and_acme()
        controller = SyncController(store=store, session=TableEditSession(zebra_and_acme()))

        controller.on_save_requested()

        store.list.assert_called_once()
        assert [r.business_name for r in controller.session.records] == ["Acme", "Zebra Co"]

    def test_save_stays_in_flight_during_reload(self):
        store = MagicMock()
        store.replace_all.return_value = SaveResult(success=True, accepted_count=2)
        controller = SyncController(store=store, session=TableEditSession(zebra_and_acme()))
        seen = {}

        def list_during_reload():
            seen["is_saving"] = controller.is_saving
            seen["second"] = controller.on_save_requested()
            return zebra_and_acme()

        store.list.side_effect = list_during_reload

        result = controller.on_save_requested()

        assert result.status == "saved"
        assert seen["is_saving"] is True
        assert seen["second"].status == "busy"
        assert store.replace_all.call_count == 1
        assert not controller.is_saving

    def test_error_message_passed_through(self):
        store = MagicMock()
        store.replace_all.return_value = SaveResult(success=False, error="HTTP error! status: 503")
        controller = SyncController(store=store, session=TableEditSession(zebra_and_acme()))

        result = controller.on_save_requested()

        assert result.status == "error"
        assert result.message == "HTTP error! status: 503"
        store.list.assert_not_called()
        assert not controller.is_saving

    def test_concurrent_save_is_rejected(self):
        started = threading.Event()
        release = threading.Event()

        def slow_replace_all(records):
            started.set()
            release.wait(5)
            return SaveResult(success=True, accepted_count=len(records))

        store = MagicMock()
        store.replace_all.side_effect = slow_replace_all
        controller = SyncController(store=store, session=TableEditSession(zebra_and_acme()), reload_after_save=False)

        results = []
        worker = threading.Thread(target=lambda: results.append(controller.on_save_requested()))
        worker.start()
        assert started.wait(5)
        assert controller.is_saving

        second = controller.on_save_requested()
        release.set()
        worker.join(5)

        assert second.status == "busy"
        assert results[0].status == "saved"
        assert store.replace_all.call_count == 1
        assert not controller.is_saving

    def test_submits_sorted_payload(self):
        store = MagicMock()
        store.replace_all.return_value = SaveResult(success=True, accepted_count=2)
        controller = SyncController(store=store, session=TableEditSession(zebra_and_acme()), reload_after_save=False)

        controller.on_save_requested()

        submitted = store.replace_all.call_args[0][0]
        assert [r.business_name for r in submitted] == ["Acme", "Zebra Co"]
