"""Formatting utilities."""

from .datetime import format_datetime, parse_datetime, utc_now, whole_months_between

__all__ = [
    "format_datetime",
    "parse_datetime",
    "utc_now",
    "whole_months_between",
]
