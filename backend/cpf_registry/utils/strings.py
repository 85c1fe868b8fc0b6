"""String manipulation utilities."""

from typing import Any

from ..core.constants import Security


def mask_document(document: str, visible_chars: int | None = None) -> str:
    """Mask identity document for security (PII protection).

    Shows only the last N characters, masking the rest with asterisks.

    Args:
        document: The document string to mask
        visible_chars: Number of characters to show at the end (default from Security constants)

    Returns:
        Masked document string

    Examples:
        >>> mask_document("48472338088")
        "*******8088"
        >>> mask_document("ABC")
        "****"
    """
    if not document:
        return Security.DOCUMENT_MASK_FULL

    visible = visible_chars or Security.DOCUMENT_VISIBLE_CHARS

    if len(document) <= visible:
        return Security.DOCUMENT_MASK_FULL

    masked_length = len(document) - visible
    return Security.DOCUMENT_MASK_CHAR * masked_length + document[-visible:]


def mask_email(email: str) -> str:
    """Mask the local part of an email address, keeping the domain.

    Examples:
        >>> mask_email("ro.naldinho@email.com")
        "****@email.com"
        >>> mask_email("not-an-email")
        "****"
    """
    if not email or "@" not in email:
        return Security.DOCUMENT_MASK_FULL

    domain = email.rsplit("@", 1)[1]
    return f"{Security.DOCUMENT_MASK_FULL}@{domain}"


def sanitize_string(value: str, max_length: int | None = None) -> str:
    """Sanitize string by trimming whitespace and optionally truncating.

    Args:
        value: String to sanitize
        max_length: Optional maximum length

    Returns:
        Sanitized string

    Examples:
        >>> sanitize_string("  hello world  ")
        "hello world"
        >>> sanitize_string("hello world", max_length=5)
        "hello"
    """
    if not value:
        return ""

    sanitized = value.strip()

    if max_length and len(sanitized) > max_length:
        return sanitized[:max_length]

    return sanitized


def sanitize_log_data(data: dict[str, Any]) -> dict[str, Any]:
    """Sanitize log data by masking PII (Personally Identifiable Information).

    Fields that are considered PII:
    - cpf / document: Masked using mask_document()
    - email: Local part masked using mask_email()
    - name: Partially masked (shows first name only)

    Args:
        data: Dictionary containing log data that may include PII

    Returns:
        Dictionary with PII fields masked

    Examples:
        >>> sanitize_log_data({'cpf': '48472338088', 'user_id': 'abc'})
        {'cpf': '*******8088', 'user_id': 'abc'}
        >>> sanitize_log_data({'name': 'Paolo Maldini'})
        {'name': 'Paolo ****'}
    """
    if not data or not isinstance(data, dict):
        return data

    sanitized = data.copy()

    for key in ['cpf', 'document']:
        if key in sanitized and sanitized[key]:
            sanitized[key] = mask_document(str(sanitized[key]))

    if 'email' in sanitized and sanitized['email']:
        sanitized['email'] = mask_email(str(sanitized['email']))

    if 'name' in sanitized and sanitized['name']:
        name = str(sanitized['name']).strip()
        if name:
            name_parts = name.split()
            if len(name_parts) > 1:
                sanitized['name'] = f"{name_parts[0]} ****"
            else:
                if len(name) > 3:
                    sanitized['name'] = f"{name[:3]}****"
                else:
                    sanitized['name'] = "****"

    for key, value in sanitized.items():
        if isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_log_data(item) if isinstance(item, dict) else item
                for item in value
            ]

    return sanitized
