"""ID generation utilities."""

import uuid


def generate_request_id(prefix: str | None = None) -> str:
    """Generate a unique request ID.

    Args:
        prefix: Optional prefix for the request ID (e.g., "API", "IMPORT")

    Returns:
        Request ID string (UUID)

    Examples:
        >>> generate_request_id()
        "a1b2c3d4-e5f6-7890-abcd-ef1234567890"
        >>> generate_request_id("API")
        "API-a1b2c3d4-e5f6-7890-abcd-ef1234567890"
    """
    request_id = str(uuid.uuid4())
    if prefix:
        return f"{prefix}-{request_id}"
    return request_id
