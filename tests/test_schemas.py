import pytest
from pydantic import ValidationError

from app.schemas.business import EDITABLE_FIELDS, BusinessRecord, ContactStage, NoteHistoryEntry
from app.schemas.core import APIResponse


class TestBusinessRecord:
    def test_defaults_are_empty_with_new_lead_stage(self):
        record = BusinessRecord()
        assert record.id == ""
        assert record.business_name == ""
        assert record.contact_stage == ContactStage.NEW_LEAD.value
        assert record.note_history_entries == []

    def test_accepts_camel_case_and_legacy_doc_id(self):
        record = BusinessRecord.model_validate({"docId": "abc", "businessName": "Acme", "facebookUrl": "fb"})
        assert record.id == "abc"
        assert record.business_name == "Acme"
        assert record.facebook_url == "fb"

    def test_wire_format_uses_camel_case(self):
        wire = BusinessRecord(id="7", business_name="Acme", online_on="web").to_wire()
        assert wire["id"] == "7"
        assert wire["businessName"] == "Acme"
        assert wire["onlineOn"] == "web"
        assert wire["contactStage"] == "New Lead"
        assert wire["noteHistoryEntries"] == []

    def test_any_shape_is_coerced_to_text(self):
        record = BusinessRecord.model_validate({
            "businessName": None,
            "phone": 5551234,
            "instagramPresent": True,
            "unknownColumn": "ignored",
            "contactStage": None,
            "noteHistoryEntries": None,
        })
        assert record.business_name == ""
        assert record.phone == "5551234"
        assert record.instagram_present == "True"
        assert record.contact_stage == "New Lead"
        assert record.note_history_entries == []
        assert "unknownColumn" not in record.to_wire()

    def test_note_history_newest_first_does_not_reorder_storage(self):
        record = BusinessRecord(note_history_entries=[
            NoteHistoryEntry(note="first", timestamp="2024-01-01 00:00:00.000000"),
            NoteHistoryEntry(note="second", timestamp="2024-01-02 00:00:00.000000"),
        ])
        assert [e.note for e in record.note_history_newest_first()] == ["second", "first"]
        assert [e.note for e in record.note_history_entries] == ["first", "second"]

    def test_editable_fields_exclude_id_and_history(self):
        assert EDITABLE_FIELDS["businessName"] == "business_name"
        assert EDITABLE_FIELDS["business_name"] == "business_name"
        assert EDITABLE_FIELDS["contactStage"] == "contact_stage"
        assert "id" not in EDITABLE_FIELDS
        assert "noteHistoryEntries" not in EDITABLE_FIELDS


class TestContactStage:
    def test_closed_set(self):
        assert ContactStage.values() == [
            "New Lead", "Walked In", "Initial Contact", "Spoke with Owner",
            "Demo Scheduled", "Demo Completed", "Follow-up", "Closed/Won", "Not Interested",
        ]


class TestAPIResponse:
    def test_success_requires_flag(self):
        with pytest.raises(ValidationError):
            APIResponse.model_validate({"data": []})

    def test_parses_records(self):
        result = APIResponse.model_validate({"success": True, "data": [{"id": "1", "businessName": "A"}], "count": 1})
        assert result.data[0].business_name == "A"
        assert result.count == 1
