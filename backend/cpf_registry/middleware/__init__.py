"""Middleware modules for the application."""

from .payload_size import PayloadSizeMiddleware
from .request_id import RequestIDMiddleware

__all__ = ["PayloadSizeMiddleware", "RequestIDMiddleware"]
