"""Trigger a library rescan on an OSMC / Kodi media centre over JSON-RPC."""

import logging
from typing import Optional

import httpx

from showsync.models.config import OsmcConfig

logger = logging.getLogger(__name__)

SIG_SCAN = "VideoLibrary.Scan"


class OsmcClient:
    """Minimal Kodi JSON-RPC client authenticated with HTTP basic auth."""

    def __init__(
        self,
        protocol: str,
        host: str,
        port: Optional[int] = None,
        prefix: str = "/",
        username: str = "osmc",
        password: str = "osmc",
        timeout: float = 10.0,
    ) -> None:
        self.protocol = protocol
        self.host = host
        self.port = port
        self.prefix = prefix if prefix.endswith("/") else f"{prefix}/"
        self.auth = (username, password)
        self.timeout = timeout

    @classmethod
    def from_config(cls, osmc: OsmcConfig) -> "OsmcClient":
        return cls(
            osmc.protocol,
            osmc.host,
            osmc.port,
            osmc.prefix,
            osmc.username,
            osmc.password,
        )

    @property
    def url(self) -> str:
        netloc = f"{self.host}:{self.port}" if self.port is not None else self.host
        return f"{self.protocol}://{netloc}{self.prefix}jsonrpc"

    def send_signal(self, method: str) -> None:
        """POST a JSON-RPC notification for *method*.

        Raises:
            httpx.HTTPError: On transport errors or a non-2xx response.
        """
        payload = {"id": "showsync", "jsonrpc": "2.0", "method": method}
        logger.debug("OSMC %s -> %s", method, self.url)
        with httpx.Client(timeout=self.timeout, auth=self.auth) as client:
            resp = client.post(self.url, json=payload)
            resp.raise_for_status()

    def trigger_refresh(self) -> None:
        """Ask the media centre to rescan its video library."""
        self.send_signal(SIG_SCAN)
