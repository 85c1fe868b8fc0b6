"""Domain Exceptions for the User Registry.

Error kinds raised by the User domain. They are raised synchronously at the
point of the violation and propagate unchanged up to the HTTP layer, which
maps them to a status code.

- ValidationError: a field failed a format, length or emptiness rule
- DuplicateError: a cpf or email is already used by an active user
- NotFoundError: an id has no active matching record
- TypeMismatchError: a batch contained something that is not a User
- SpreadsheetError: a CSV upload is malformed or carries an invalid row

Infrastructure failures (e.g. database connectivity) are not DomainErrors.
"""


class DomainError(Exception):
    """Base exception for all user domain errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """A single field failed a validation rule."""
    pass


class DuplicateError(DomainError):
    """A uniqueness rule was violated against active users.

    Attributes:
        field: Name of the offending field ("cpf" or "email")
    """

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """The referenced id has no active matching user."""
    pass


class TypeMismatchError(DomainError):
    """A batch input contained an element that is not a User aggregate."""
    pass


class SpreadsheetError(DomainError):
    """The uploaded CSV spreadsheet is malformed or carries an invalid row."""
    pass
