"""Exception hierarchy for showsync.

Errors are grouped by the stage that raises them:

- ``ParseError`` subclasses describe why a single show folder or file could not
  be turned into an Episode. The scanner recovers from these according to the
  configured ``FailureAction``.
- ``ReadError`` subclasses terminate a scan.
- ``TransferError`` subclasses terminate the current sync run; nothing is
  retried automatically.
"""


class ShowSyncError(Exception):
    """Base error type for everything raised by showsync."""


class ConfigError(ShowSyncError):
    """Configuration file missing, unreadable or invalid."""


class LockError(ShowSyncError):
    """Another showsync process holds the lock."""


# ---------------------------------------------------------------------------
# Parse-level
# ---------------------------------------------------------------------------


class ParseError(ShowSyncError):
    """A show folder or episode file could not be mapped to a remote target."""

    description = "could not parse episode"

    def __str__(self) -> str:
        detail = super().__str__()
        return f"{detail}: {self.description}" if detail else self.description


class BadShowError(ParseError):
    description = "could not match TV show to existing entry"


class BadFilenameError(ParseError):
    description = "could not calculate season / episode number from filename"


class BadPathError(ParseError):
    description = "could not find TV show name"


class BadExtensionError(ParseError):
    description = "file extension is not permitted"


# ---------------------------------------------------------------------------
# Scan-level
# ---------------------------------------------------------------------------


class ReadError(ShowSyncError):
    """The local library scan stopped."""


class ScanAbortedError(ReadError):
    def __init__(self) -> None:
        super().__init__(
            "Aborted due to errors! To skip individual episodes with errors, "
            'set on_failure = "skip"'
        )


class ScanFatalError(ReadError):
    def __init__(self, root: object) -> None:
        super().__init__(
            f"Couldn't read TV shows in {root}. Check that the TV show path and "
            "any permissions are ok, and that the path contains one folder per "
            "TV show."
        )
        self.root = root


# ---------------------------------------------------------------------------
# Transfer-level
# ---------------------------------------------------------------------------


class TransferError(ShowSyncError):
    """Uploading an episode failed; the remote target was not touched."""


class RemoteTransportError(TransferError):
    """The SSH connection or channel failed."""


class RemoteCommandError(TransferError):
    """A remote shell command exited with a non-zero status."""

    def __init__(self, command: str, status: int, stderr: str = "") -> None:
        message = f"remote command exited {status}: {command!r}"
        if stderr:
            message += f"\nstderr: {stderr.strip()}"
        super().__init__(message)
        self.command = command
        self.status = status
        self.stderr = stderr


class LocalFileError(TransferError):
    """The local episode file could not be read."""


class PathEncodingError(TransferError):
    """A path cannot be represented on the remote side."""


class TransferThreadError(TransferError):
    """The upload worker thread stopped without reporting a result."""
