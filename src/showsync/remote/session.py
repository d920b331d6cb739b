"""Abstractions over a remote shell session.

A :class:`RemoteSession` only has to provide two primitives: running a shell
command and opening a byte stream to a remote file. Listing, directory
creation, renames and temp-file cleanup are built on top of ``run`` with every
path escaped by :func:`showsync.remote.shell.quote_path`.

A session is not safe for concurrent use. Callers issue one remote operation
at a time.
"""

from abc import ABC, abstractmethod
from typing import List

from showsync.remote.shell import RemotePath, ensure_encodable, quote_path


class WriteStream(ABC):
    """A writable byte stream to a remote file of a known, exact size."""

    @abstractmethod
    def write(self, data: bytes) -> int:
        """Write some of *data* and return how many bytes were accepted.

        May accept fewer bytes than offered; callers loop until drained.
        """

    @abstractmethod
    def send_eof(self) -> None:
        """Signal that no more data follows."""

    @abstractmethod
    def wait_eof(self) -> None:
        """Block until the remote acknowledges the end of the stream."""

    @abstractmethod
    def close(self) -> None:
        """Close the stream."""

    @abstractmethod
    def wait_close(self) -> None:
        """Block until the remote side has closed, raising on failure."""


class RemoteSession(ABC):
    """A shell session on the remote host."""

    @abstractmethod
    def run(self, command: str) -> str:
        """Run *command* in a remote shell and return its stdout.

        Raises:
            RemoteCommandError: The command exited with a non-zero status.
            RemoteTransportError: The session failed.
        """

    @abstractmethod
    def open_write_stream(self, path: RemotePath, mode: int, size: int) -> WriteStream:
        """Open a stream that creates *path* with *mode* and exactly *size* bytes."""

    def close(self) -> None:
        """Release the session. The default implementation does nothing."""

    def __enter__(self) -> "RemoteSession":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:  # type: ignore[no-untyped-def]
        self.close()
        return False

    def list_names(self, path: RemotePath) -> List[str]:
        """List a remote directory, one entry per line of ``ls -1``."""
        output = self.run(f'ls -1 "{quote_path(ensure_encodable(path))}"')
        return output.splitlines()

    def ensure_dir(self, path: RemotePath) -> None:
        """Create *path* and any missing parents; a no-op if it exists."""
        self.run(f'mkdir -p "{quote_path(ensure_encodable(path))}"')

    def rename(self, src: RemotePath, dst: RemotePath) -> None:
        """Move *src* to *dst* with a single remote ``mv``."""
        self.run(
            f'mv "{quote_path(ensure_encodable(src))}" '
            f'"{quote_path(ensure_encodable(dst))}"'
        )

    def delete_matching(self, root: RemotePath, pattern: str) -> None:
        """Delete every file under *root* whose name matches the glob *pattern*."""
        self.run(
            f'find "{quote_path(ensure_encodable(root))}" -type f '
            f'-name "{quote_path(pattern)}" -delete'
        )
