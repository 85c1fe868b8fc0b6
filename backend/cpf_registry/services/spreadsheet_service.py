"""User Spreadsheet Service.

Converts between the fixed `name,cpf,email` CSV layout and User aggregates.

Import builds one validated User per data row and checks each row for
duplicates against the store and against earlier rows of the same file.
Any failure is reported with the 1-based file line it came from, the header
being line 1. Persisting the built users is left to User.create_from_batch.
"""

from __future__ import annotations

import csv
import io

from ..core.config import settings
from ..core.constants import ErrorMessages, SpreadsheetLayout
from ..core.exceptions import DomainError, DuplicateError, SpreadsheetError
from ..core.logging import get_logger
from ..domain.ports import IdGenerator, UserStore
from ..domain.user import Clock, User
from ..utils import sanitize_string

logger = get_logger(__name__)


class UserSpreadsheet:
    """CSV import/export adapter for users."""

    def __init__(
        self,
        store: UserStore,
        id_generator: IdGenerator | None = None,
        clock: Clock | None = None,
    ):
        self._store = store
        self._id_generator = id_generator
        self._clock = clock

    def validate_upload(self, mime_type: str | None, size_in_bytes: int) -> None:
        """Reject uploads with an unexpected mime type or above the size limit.

        Raises:
            SpreadsheetError: If the upload cannot be a user spreadsheet
        """
        if mime_type and mime_type not in SpreadsheetLayout.ACCEPTED_MIME_TYPES:
            raise SpreadsheetError(
                ErrorMessages.SPREADSHEET_MIME_TYPE.format(mime_type=mime_type)
            )

        if size_in_bytes > settings.MAX_SPREADSHEET_SIZE_KB * 1024:
            raise SpreadsheetError(
                ErrorMessages.SPREADSHEET_TOO_LARGE.format(max_kb=settings.MAX_SPREADSHEET_SIZE_KB)
            )

    def decode(self, raw: bytes) -> str:
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SpreadsheetError(ErrorMessages.SPREADSHEET_ENCODING) from e

    def build_users_from_content(self, content: str) -> list[User]:
        """Parse CSV content into validated, not yet persisted, users.

        Args:
            content: Full CSV text, header included

        Returns:
            One User per non-blank data row, in file order

        Raises:
            SpreadsheetError: On empty content, wrong headers, no data rows,
                or any invalid or duplicated row
        """
        content = (content or "").lstrip("\ufeff")
        if not content.strip():
            raise SpreadsheetError(ErrorMessages.SPREADSHEET_EMPTY)

        reader = csv.reader(io.StringIO(content), delimiter=SpreadsheetLayout.DELIMITER)

        headers = [header.strip().lower() for header in next(reader, [])]
        if headers != SpreadsheetLayout.HEADERS:
            raise SpreadsheetError(
                ErrorMessages.SPREADSHEET_HEADERS.format(
                    headers=SpreadsheetLayout.DELIMITER.join(SpreadsheetLayout.HEADERS)
                )
            )

        users: list[User] = []
        seen_cpfs: set[str] = set()
        seen_emails: set[str] = set()

        for row in reader:
            if not any(cell.strip() for cell in row):
                continue

            line = reader.line_num
            try:
                user = self._build_user(row)

                if user.cpf in seen_cpfs:
                    raise DuplicateError(ErrorMessages.CPF_ALREADY_CREATED, field='cpf')
                if user.email in seen_emails:
                    raise DuplicateError(ErrorMessages.EMAIL_ALREADY_CREATED, field='email')

                user.check_already_created_cpf()
                user.check_already_created_email()
            except DomainError as e:
                logger.warning(
                    "Spreadsheet row rejected",
                    extra={'line': line, 'reason': e.message}
                )
                raise SpreadsheetError(
                    ErrorMessages.SPREADSHEET_LINE.format(line=line, reason=e.message)
                ) from e

            seen_cpfs.add(user.cpf)
            seen_emails.add(user.email)
            users.append(user)

        if not users:
            raise SpreadsheetError(ErrorMessages.SPREADSHEET_NO_ROWS)

        logger.info("Spreadsheet parsed", extra={'users': len(users)})
        return users

    def build_content_from_users(self, users: list[User]) -> str:
        """Render users as CSV text with the `name,cpf,email` header.

        Raises:
            SpreadsheetError: If there are no users to export
        """
        if not users:
            raise SpreadsheetError(ErrorMessages.SPREADSHEET_NO_USERS_TO_EXPORT)

        buffer = io.StringIO()
        writer = csv.writer(
            buffer,
            delimiter=SpreadsheetLayout.DELIMITER,
            lineterminator="\n"
        )
        writer.writerow(SpreadsheetLayout.HEADERS)
        for user in users:
            writer.writerow([user.name, user.cpf, user.email])

        return buffer.getvalue()

    def _build_user(self, row: list[str]) -> User:
        expected = len(SpreadsheetLayout.HEADERS)
        if len(row) != expected:
            raise SpreadsheetError(
                ErrorMessages.SPREADSHEET_COLUMNS.format(expected=expected, got=len(row))
            )

        name, cpf, email = (sanitize_string(cell) for cell in row)
        return User.build(
            self._store,
            name=name,
            email=email,
            cpf=cpf,
            id_generator=self._id_generator,
            clock=self._clock,
        )
