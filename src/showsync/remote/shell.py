"""Helpers for building remote shell commands and temp paths.

Every path interpolated into a remote command goes through :func:`quote_path`
and is wrapped in double quotes by the caller.
"""

from pathlib import PurePosixPath
from typing import Union

from showsync.errors import PathEncodingError

# Temp uploads are named "<TEMP_PREFIX>.<final name>" next to their target so
# leftovers from an interrupted run can be found with a single glob.
TEMP_PREFIX = ".showsync.tmp"
TEMP_GLOB = f"{TEMP_PREFIX}.*"

RemotePath = Union[str, PurePosixPath]


def quote_path(path: RemotePath) -> str:
    """Escape a path for use inside a double-quoted shell string.

    Contract: every ``"`` becomes ``\\"``; all other characters are passed
    through unchanged. The result is meant to be placed between double quotes.

    Example:
        >>> quote_path('/tv/The "Best" Show')
        '/tv/The \\\\"Best\\\\" Show'
    """
    return str(path).replace('"', '\\"')


def ensure_encodable(path: RemotePath) -> str:
    """Return *path* as a string, rejecting names that are not valid UTF-8."""
    text = str(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise PathEncodingError(f"Path cannot be sent to the remote host: {text!r}") from e
    return text


def temp_path(path: PurePosixPath) -> PurePosixPath:
    """Return the temporary upload path for a remote target.

    Raises:
        PathEncodingError: *path* has no file name.
    """
    if not path.name:
        raise PathEncodingError(f"Remote path has no file name: {path}")
    return path.with_name(f"{TEMP_PREFIX}.{path.name}")
