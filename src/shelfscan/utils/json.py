"""JSON serialization helpers for shelfscan.

Reports carry datetime and pathlib.Path values that the standard encoder
rejects; DateTimeEncoder writes them as ISO 8601 strings and plain paths.
"""

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder for shelfscan reports."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to JSON-serializable format.

        Args:
            obj: Object to serialize (may be datetime, Path, Enum or other types)

        Returns:
            JSON-serializable representation of the object.
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        if isinstance(obj, Enum):
            return obj.value
        # Let the base class default method handle it or raise TypeError
        return super().default(obj)
