"""Utility functions organized by domain.

Prefer importing from specific modules for better clarity:
    from cpf_registry.utils.formatting import format_datetime
    from cpf_registry.utils.strings import mask_document
    from cpf_registry.utils.generators import generate_request_id
"""

# Formatting
from .formatting import format_datetime, parse_datetime, utc_now, whole_months_between

# Generators
from .generators import generate_request_id

# Strings
from .strings import mask_document, mask_email, sanitize_log_data, sanitize_string

__all__ = [
    # Formatting
    "format_datetime",
    "parse_datetime",
    "utc_now",
    "whole_months_between",
    # Generators
    "generate_request_id",
    # Strings
    "mask_document",
    "mask_email",
    "sanitize_string",
    "sanitize_log_data",
]
