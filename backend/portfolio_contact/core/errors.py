from typing import List, Optional


class ContactError(Exception):
    """Base class for failures in the contact submission path."""


class ValidationError(ContactError):
    """Submitted fields were malformed; reported to the caller as a 400."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class StorageError(ContactError):
    """The database was unreachable or rejected a write/query."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class NotificationError(ContactError):
    """The operator email could not be delivered. Never fatal to a request."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
