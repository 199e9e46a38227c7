from __future__ import annotations


class LentError(Exception):
    """Base error for the Lent calendar.

    ``operation`` and ``entity_id`` are kept so callers can log where the
    failure happened without parsing the message.
    """

    def __init__(self, message: str, operation: str | None = None, entity_id: str | None = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.entity_id = entity_id

    def __str__(self) -> str:
        return self.message


class ValidationError(LentError):
    pass


class DateParseError(ValidationError):
    pass


class StoreError(LentError):
    pass


class IdentityError(LentError):
    pass
