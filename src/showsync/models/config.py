"""Configuration models for showsync.

Each table of ``config.toml`` maps onto one model below. Every field carries
its default, so a config file only needs ``[local] default_dir``.
- Models are validated once at startup by :mod:`showsync.utils.config` and
  then passed by reference into the scanner, resolvers and remote session.
- ``${NAME}`` references are expanded before validation, not here.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from showsync.models.core import FailureAction

DEFAULT_ALLOWED_EXTS = ["avi", "m4v", "ass", "3gp", "mkv", "mp4", "srt"]


class LocalConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default_dir: str
    """Local library root: one folder per show, episode files inside."""


class RemoteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "localhost"
    port: int = Field(default=22, gt=0, lt=65536)
    username: str = "osmc"
    privkey: str = "${HOME}/.ssh/id_rsa"
    """Private key used for authentication when no password is set."""
    password: Optional[str] = None
    tv_dir: str = "/usr/store/tv/"
    """Remote library root: one folder per show."""
    timeout: float = 20.0
    """Seconds allowed for connecting and authenticating."""
    command_timeout: Optional[float] = Field(default=None, gt=0)
    """Seconds a remote command may stay silent; unset waits for it to finish."""


class ValidationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    allowed_exts: List[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_EXTS))
    on_failure: FailureAction = FailureAction.SKIP
    prompt_confirmation: bool = True

    @field_validator("allowed_exts")
    @classmethod
    def _normalise_exts(cls, value: List[str]) -> List[str]:
        return [ext.lower().lstrip(".") for ext in value]


class LogConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    local_path: str = "${HOME}/.showsync/events/"
    """Directory receiving one JSON audit record per sync run."""


class LockConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str = "${HOME}/.showsync/showsync.lock"


class TMDBConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    token: Optional[str] = None
    """Bearer token; falls back to TMDB_READ_ACCESS_TOKEN in the environment."""
    protocol: str = "https"
    host: str = "api.themoviedb.org"
    timeout: float = 10.0


class OsmcConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    protocol: str = "http"
    host: str
    port: Optional[int] = None
    prefix: str = "/"
    username: str = "osmc"
    password: str = "osmc"


class SyncConfig(BaseModel):
    """Fully resolved showsync configuration."""

    model_config = ConfigDict(extra="forbid")

    local: LocalConfig
    remote: RemoteConfig = Field(default_factory=RemoteConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    log: LogConfig = Field(default_factory=LogConfig)
    lock: LockConfig = Field(default_factory=LockConfig)
    tmdb: TMDBConfig = Field(default_factory=TMDBConfig)
    osmc: Optional[OsmcConfig] = None
    """Media-centre refresh after a sync; disabled when the table is absent."""
