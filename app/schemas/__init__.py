# app/schemas/__init__.py

from .business import BusinessRecord, ContactStage, NoteHistoryEntry, EDITABLE_FIELDS
from .core import APIResponse, SaveRequest, SaveResult

__all__ = [
    "BusinessRecord",
    "ContactStage",
    "NoteHistoryEntry",
    "EDITABLE_FIELDS",
    "APIResponse",
    "SaveRequest",
    "SaveResult",
]
