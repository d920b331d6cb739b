"""JSON serialization helpers for showsync.

Audit records contain datetimes and local paths, neither of which the
standard library encoder handles.
- datetime values are written in ISO 8601 so records sort and parse anywhere.
- Path values are written as plain strings.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Self


class DateTimeEncoder(json.JSONEncoder):
    """JSON encoder that understands datetime and Path objects."""

    def default(self: Self, obj: object) -> Any:  # noqa: ANN401
        """Convert objects to a JSON-serializable form.

        Args:
            obj: Object to serialize.

        Returns:
            An ISO 8601 string for datetimes, a string for paths, otherwise
            whatever the base class does (which raises TypeError).
        """
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, Path):
            return str(obj)
        return super().default(obj)
