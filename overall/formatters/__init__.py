"""Formatting utilities for overall.

- date: Date and age formatting
- status: Status, priority and reason formatting
"""

from .date import format_date, format_age

from .status import (
    format_status,
    format_priority,
    format_repo_name,
    get_status_style,
)

__all__ = [
    # Date
    "format_date",
    "format_age",
    # Status
    "format_status",
    "format_priority",
    "format_repo_name",
    "get_status_style",
]
