import json
from enum import Enum
from typing import Any, Dict, List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ContactStage(str, Enum):
    NEW_LEAD = "New Lead"
    WALKED_IN = "Walked In"
    INITIAL_CONTACT = "Initial Contact"
    SPOKE_WITH_OWNER = "Spoke with Owner"
    DEMO_SCHEDULED = "Demo Scheduled"
    DEMO_COMPLETED = "Demo Completed"
    FOLLOW_UP = "Follow-up"
    CLOSED_WON = "Closed/Won"
    NOT_INTERESTED = "Not Interested"

    @classmethod
    def values(cls) -> List[str]:
        return [stage.value for stage in cls]


def _as_text(value: Any) -> str:
    """Coerce whatever the client sent into the string the grid edits."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class NoteHistoryEntry(BaseModel):
    note: str = ""
    timestamp: str = ""

    model_config = ConfigDict(extra="ignore")

    @field_validator("note", "timestamp", mode="before")
    def coerce_text(cls, value):
        return _as_text(value)


class BusinessRecord(BaseModel):
    """One business row. Every attribute is an optional string except the note history."""
    id: str = Field(default="", validation_alias=AliasChoices("id", "docId"))
    business_name: str = ""
    address: str = ""
    street: str = ""
    city: str = ""
    zip: str = ""
    phone: str = ""
    website: str = ""
    google: str = ""
    facebook_url: str = ""
    facebook_last_post: str = ""
    instagram_url: str = ""
    instagram_present: str = ""
    category: str = ""
    online_on: str = ""
    notes: str = ""
    contact_stage: str = ContactStage.NEW_LEAD.value
    note_history_entries: List[NoteHistoryEntry] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator(
        "id", "business_name", "address", "street", "city", "zip", "phone",
        "website", "google", "facebook_url", "facebook_last_post",
        "instagram_url", "instagram_present", "category", "online_on", "notes",
        mode="before",
    )
    def coerce_text(cls, value):
        return _as_text(value)

    @field_validator("contact_stage", mode="before")
    def default_stage(cls, value):
        text = _as_text(value)
        return text or ContactStage.NEW_LEAD.value

    @field_validator("note_history_entries", mode="before")
    def default_history(cls, value):
        return [] if value is None else value

    def note_history_newest_first(self) -> List[NoteHistoryEntry]:
        return list(reversed(self.note_history_entries))

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


NON_EDITABLE_FIELDS = ("id", "note_history_entries")

# wire name and python name both resolve to the python attribute
EDITABLE_FIELDS: Dict[str, str] = {}
for _name in BusinessRecord.model_fields:
    if _name in NON_EDITABLE_FIELDS:
        continue
    EDITABLE_FIELDS[_name] = _name
    EDITABLE_FIELDS[to_camel(_name)] = _name
