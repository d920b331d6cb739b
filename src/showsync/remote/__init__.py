"""Remote side of a sync: shell session, library layout and uploads."""

from showsync.remote.library import RemoteLibrary
from showsync.remote.osmc import OsmcClient
from showsync.remote.session import RemoteSession, WriteStream
from showsync.remote.ssh import SSHSession
from showsync.remote.transfer import ProgressReporter, upload_file

__all__ = [
    "OsmcClient",
    "ProgressReporter",
    "RemoteLibrary",
    "RemoteSession",
    "SSHSession",
    "WriteStream",
    "upload_file",
]
