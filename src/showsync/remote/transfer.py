"""Upload a single local file to the remote library.

The target is never written directly. Data goes to a temp file in the target's
directory and is moved over the target with one ``mv`` once the remote side
has acknowledged the whole stream, so an interrupted upload leaves at most a
``.showsync.tmp.*`` file behind (see :meth:`RemoteLibrary.wipe_temp`).

Data is streamed by a worker thread while the calling thread reports
progress; the two communicate through a queue of chunk sizes.
"""

import logging
import queue
import threading
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional

from showsync.errors import LocalFileError, RemoteTransportError, TransferThreadError
from showsync.remote.session import RemoteSession, WriteStream
from showsync.remote.shell import temp_path

logger = logging.getLogger(__name__)

BUF_SIZE = 4 * 1024
REMOTE_FILE_MODE = 0o644

_DONE = object()


class ProgressReporter:
    """Receives byte counts while a file is uploaded.

    The base class ignores everything; the CLI supplies a rich progress bar.
    """

    def start(self, total: int) -> None:
        pass

    def advance(self, n: int) -> None:
        pass

    def finish(self, ok: bool) -> None:
        pass


def consume_buffer(writer: WriteStream, buf: bytes) -> None:
    """Write all of *buf*, letting the writer accept it in pieces.

    Raises:
        RemoteTransportError: The writer accepted zero bytes.
    """
    view = memoryview(buf)
    total = 0
    while total < len(view):
        written = writer.write(bytes(view[total:]))
        if written <= 0:
            raise RemoteTransportError("Remote stream accepted no data")
        total += written


class _UploadWorker(threading.Thread):
    """Copy a local file into a write stream, reporting each chunk."""

    def __init__(self, local_file: BinaryIO, stream: WriteStream, progress: queue.Queue) -> None:
        super().__init__(name="showsync-upload", daemon=True)
        self.local_file = local_file
        self.stream = stream
        self.progress = progress
        self.error: Optional[BaseException] = None
        self.completed = False

    def _read(self) -> bytes:
        try:
            return self.local_file.read(BUF_SIZE)
        except OSError as e:
            raise LocalFileError(f"Could not read local file: {e}") from e

    def run(self) -> None:
        try:
            while True:
                chunk = self._read()
                if not chunk:
                    break
                consume_buffer(self.stream, chunk)
                self.progress.put(len(chunk))

            self.stream.send_eof()
            self.stream.wait_eof()
            self.stream.close()
            self.stream.wait_close()
            self.completed = True
        except Exception as e:
            # Handed back to the calling thread by handle_upload.
            self.error = e
        finally:
            self.progress.put(_DONE)


def handle_upload(
    local_file: BinaryIO,
    stream: WriteStream,
    size: int,
    progress: Optional[ProgressReporter] = None,
) -> None:
    """Stream *local_file* into *stream* on a worker thread.

    Blocks until the worker has finished, feeding *progress* as chunks are
    written.

    Raises:
        TransferError: Whatever the worker failed with.
        TransferThreadError: The worker stopped without finishing.
    """
    progress = progress or ProgressReporter()
    chunks: queue.Queue = queue.Queue()
    worker = _UploadWorker(local_file, stream, chunks)

    progress.start(size)
    worker.start()
    while True:
        item = chunks.get()
        if item is _DONE:
            break
        progress.advance(item)
    worker.join()

    progress.finish(worker.completed)
    if worker.error is not None:
        raise worker.error
    if not worker.completed:
        raise TransferThreadError("Upload thread stopped without completing")


def upload_file(
    session: RemoteSession,
    local: Path,
    remote: PurePosixPath,
    progress: Optional[ProgressReporter] = None,
) -> None:
    """Upload *local* to *remote* through a temp file and an atomic rename.

    Args:
        session: Remote session to write through.
        local: Local file to upload.
        remote: Absolute remote target path.
        progress: Optional byte-level progress reporter.

    Raises:
        LocalFileError: *local* cannot be opened or read.
        PathEncodingError: *remote* cannot be expressed as a remote path.
        TransferError: The transfer or the final rename failed. The target is
            left as it was.
    """
    tmp = temp_path(remote)
    session.ensure_dir(remote.parent)

    try:
        size = local.stat().st_size
        local_file = local.open("rb")
    except OSError as e:
        raise LocalFileError(f"Could not open {local}: {e}") from e

    logger.info("Uploading %s -> %s (%d bytes)", local, remote, size)
    with local_file:
        stream = session.open_write_stream(tmp, REMOTE_FILE_MODE, size)
        try:
            handle_upload(local_file, stream, size, progress)
        except BaseException:
            stream.close()
            raise

    session.rename(tmp, remote)
    logger.debug("Renamed %s -> %s", tmp, remote)
