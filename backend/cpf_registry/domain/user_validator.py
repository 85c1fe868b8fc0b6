"""Field-level validation rules for the User aggregate.

Every method raises ValidationError with a stable message on failure and
returns None otherwise.
"""

import re

from email_validator import EmailNotValidError, validate_email

from ..core.constants import ErrorMessages, ValidationLimits
from ..core.exceptions import ValidationError
from ..utils.formatting import parse_datetime
from .cpf import CpfValidator

_UUID_RE = re.compile(ValidationLimits.UUID_PATTERN)
_NON_DIGIT_RE = re.compile(r"\D")


class UserValidator:
    """Validates User fields one at a time."""

    def validate_id(self, id: str) -> None:
        if not isinstance(id, str) or not _UUID_RE.fullmatch(id):
            raise ValidationError(ErrorMessages.ID_INVALID)

    def validate_name(self, name: str) -> None:
        if not name:
            raise ValidationError(ErrorMessages.NAME_EMPTY)

        if len(name) > ValidationLimits.NAME_MAX_LENGTH:
            raise ValidationError(ErrorMessages.NAME_TOO_LONG)

    def validate_email(self, email: str) -> None:
        if not email:
            raise ValidationError(ErrorMessages.EMAIL_EMPTY)

        if len(email) > ValidationLimits.EMAIL_MAX_LENGTH:
            raise ValidationError(ErrorMessages.EMAIL_TOO_LONG)

        try:
            validate_email(email, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError(ErrorMessages.EMAIL_INVALID) from e

    def validate_cpf(self, cpf: str) -> None:
        """Validate a CPF as typed by a user.

        Surrounding whitespace is ignored. Any other non-digit character
        (including "." and "-" punctuation) makes the value invalid.
        """
        trimmed_cpf = (cpf or "").strip()

        if not trimmed_cpf:
            raise ValidationError(ErrorMessages.CPF_EMPTY)

        if _NON_DIGIT_RE.search(trimmed_cpf):
            raise ValidationError(ErrorMessages.CPF_INVALID)

        if (
            len(trimmed_cpf) != ValidationLimits.CPF_LENGTH
            or not trimmed_cpf.isascii()
            or not CpfValidator.is_valid(trimmed_cpf)
        ):
            raise ValidationError(ErrorMessages.CPF_INVALID)

    def validate_date_creation(self, date_creation: str) -> None:
        if not date_creation:
            raise ValidationError(ErrorMessages.DATE_CREATION_EMPTY)

        if parse_datetime(date_creation) is None:
            raise ValidationError(ErrorMessages.DATE_CREATION_INVALID)

    def validate_date_edition(self, date_edition: str) -> None:
        if not date_edition:
            raise ValidationError(ErrorMessages.DATE_EDITION_EMPTY)

        if parse_datetime(date_edition) is None:
            raise ValidationError(ErrorMessages.DATE_EDITION_INVALID)
