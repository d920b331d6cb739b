"""SSH implementation of :class:`showsync.remote.session.RemoteSession`.

Commands run over paramiko exec channels. Files are written with the SCP sink
protocol (``scp -t <target>`` on the remote end), which only needs the scp
binary that every SSH server ships, not an SFTP subsystem.
"""

import logging
from pathlib import PurePosixPath
from typing import Optional

import paramiko

from showsync.errors import RemoteCommandError, RemoteTransportError
from showsync.models.config import RemoteConfig
from showsync.remote.session import RemoteSession, WriteStream
from showsync.remote.shell import RemotePath, ensure_encodable, quote_path

logger = logging.getLogger(__name__)

# SCP replies with a single status byte after every control message.
_SCP_OK = b"\x00"
_SCP_WARNING = b"\x01"
_SCP_ERROR = b"\x02"


def _decode(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


class ScpWriteStream(WriteStream):
    """Write one file through an ``scp -t`` channel.

    The file header is sent on construction, so by the time the stream is
    returned the remote side has accepted the target name and size.
    """

    def __init__(
        self, channel: paramiko.Channel, path: RemotePath, mode: int, size: int
    ) -> None:
        self.channel = channel
        self.path = ensure_encodable(path)
        self.size = size
        self.exit_status: Optional[int] = None
        try:
            self._send_header(mode, size)
        except BaseException:
            self.channel.close()
            raise

    def _send_header(self, mode: int, size: int) -> None:
        name = PurePosixPath(self.path).name
        try:
            self.channel.exec_command(f'scp -t "{quote_path(self.path)}"')
            self._read_ack()
            self.channel.sendall(f"C{mode:04o} {size} {name}\n".encode("utf-8"))
            self._read_ack()
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Could not open {self.path}: {e}") from e

    def _read_ack(self) -> None:
        status = self.channel.recv(1)
        if status == _SCP_OK:
            return
        if status in (_SCP_WARNING, _SCP_ERROR):
            message = bytearray()
            while True:
                char = self.channel.recv(1)
                if not char or char == b"\n":
                    break
                message += char
            raise RemoteTransportError(f"scp rejected {self.path}: {_decode(bytes(message))}")
        if not status:
            raise RemoteTransportError(f"scp closed the channel while writing {self.path}")
        raise RemoteTransportError(f"Unexpected scp response {status!r} for {self.path}")

    def write(self, data: bytes) -> int:
        try:
            return self.channel.send(data)
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Write to {self.path} failed: {e}") from e

    def send_eof(self) -> None:
        try:
            self.channel.sendall(_SCP_OK)
            self._read_ack()
            self.channel.shutdown_write()
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Could not finish {self.path}: {e}") from e

    def wait_eof(self) -> None:
        try:
            while self.channel.recv(4096):
                pass
            self.exit_status = self.channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Lost channel for {self.path}: {e}") from e

    def close(self) -> None:
        self.channel.close()

    def wait_close(self) -> None:
        if self.exit_status is None:
            self.exit_status = self.channel.recv_exit_status()
        if self.exit_status != 0:
            raise RemoteCommandError(f'scp -t "{self.path}"', self.exit_status)


class SSHSession(RemoteSession):
    """A remote session over a connected paramiko SSHClient."""

    def __init__(self, client: paramiko.SSHClient, timeout: Optional[float] = None) -> None:
        self.client = client
        self.timeout = timeout

    @classmethod
    def connect(cls, remote: RemoteConfig) -> "SSHSession":
        """Open an SSH connection described by *remote*.

        Authenticates with ``remote.password`` when set, otherwise with the
        private key at ``remote.privkey``.

        Raises:
            RemoteTransportError: The connection or authentication failed.
        """
        logger.info("Connecting to %s@%s:%d", remote.username, remote.host, remote.port)
        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        kw: dict = dict(
            hostname=remote.host,
            port=remote.port,
            username=remote.username,
            timeout=remote.timeout,
        )
        if remote.password:
            kw["password"] = remote.password
        else:
            kw["key_filename"] = remote.privkey
        try:
            client.connect(**kw)
        except (paramiko.SSHException, OSError) as e:
            client.close()
            raise RemoteTransportError(
                f"Could not connect to {remote.username}@{remote.host}:{remote.port}: {e}"
            ) from e
        return cls(client, timeout=remote.command_timeout)

    def _transport(self) -> paramiko.Transport:
        transport = self.client.get_transport()
        if transport is None or not transport.is_active():
            raise RemoteTransportError("SSH connection is not active")
        return transport

    def run(self, command: str) -> str:
        logger.debug("Remote: %s", command)
        try:
            _, stdout, stderr = self.client.exec_command(command, timeout=self.timeout)
            out = _decode(stdout.read())
            err = _decode(stderr.read())
            status = stdout.channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Remote command failed: {command!r}: {e}") from e
        if status != 0:
            raise RemoteCommandError(command, status, err)
        return out

    def open_write_stream(self, path: RemotePath, mode: int, size: int) -> WriteStream:
        logger.debug("Opening scp stream to %s (%d bytes)", path, size)
        try:
            channel = self._transport().open_session()
        except (paramiko.SSHException, OSError) as e:
            raise RemoteTransportError(f"Could not open a channel for {path}: {e}") from e
        return ScpWriteStream(channel, path, mode, size)

    def close(self) -> None:
        self.client.close()
