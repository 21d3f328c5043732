"""Utility modules for shelfscan."""

from shelfscan.utils.config import resolve_setting
from shelfscan.utils.json import DateTimeEncoder

__all__ = [
    "DateTimeEncoder",
    "resolve_setting",
]
