"""Payload Size Validation Middleware.

Rejects request bodies whose declared Content-Length exceeds the
spreadsheet upload limit before they are read.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from ..core.config import settings
from ..core.constants import SpreadsheetLayout
from ..core.logging import get_logger, get_request_id

logger = get_logger(__name__)


class PayloadSizeMiddleware(BaseHTTPMiddleware):
    """Middleware to validate request payload sizes.

    Methods with potential request bodies: POST, PUT, PATCH
    """

    def __init__(self, app, max_size_bytes: int | None = None):
        """Initialize middleware with optional custom max size.

        Args:
            app: The ASGI application
            max_size_bytes: Optional custom max size in bytes. If None, uses
                settings.MAX_SPREADSHEET_SIZE_KB plus the multipart allowance
        """
        super().__init__(app)
        if max_size_bytes is None:
            self.max_size_bytes = (
                settings.MAX_SPREADSHEET_SIZE_KB * 1024
                + SpreadsheetLayout.MULTIPART_OVERHEAD_BYTES
            )
        else:
            self.max_size_bytes = max_size_bytes

    async def dispatch(self, request: Request, call_next):
        if request.method in ("POST", "PUT", "PATCH"):
            content_length = request.headers.get("content-length")

            if content_length and content_length.isdigit():
                content_length_int = int(content_length)

                if content_length_int > self.max_size_bytes:
                    logger.warning(
                        "Request payload too large (rejected by middleware)",
                        extra={
                            'method': request.method,
                            'path': request.url.path,
                            'content_length': content_length_int,
                            'max_size_bytes': self.max_size_bytes
                        }
                    )

                    return JSONResponse(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        content={
                            "error": "Request payload too large",
                            "detail": (
                                f"Maximum allowed size: {self.max_size_bytes} bytes, "
                                f"received: {content_length_int} bytes"
                            ),
                            "request_id": get_request_id()
                        }
                    )

        return await call_next(request)
