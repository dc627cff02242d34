class RecordStoreError(Exception):
    """Base class for failures talking to the record backend."""


class TransportError(RecordStoreError):
    """Connection failure or non-2xx HTTP status."""


class ProtocolError(RecordStoreError):
    """Response body missing the expected {success, data|error} shape, or success is false."""


class SessionError(Exception):
    """Base class for invalid edits against the working copy."""


class RowIndexError(SessionError, IndexError):
    pass


class FieldNameError(SessionError, KeyError):
    pass


class FieldValueError(SessionError, ValueError):
    pass


class NoteEditError(SessionError):
    """Raised when a note draft is committed or edited without a live draft."""
