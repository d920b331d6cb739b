"""Locate, read and validate ``config.toml``.

The file is looked up in a fixed order (see :data:`CONFIG_SEARCH_PATHS`), the
first one found wins. Path-like settings may reference environment variables
as ``${NAME}``; unknown variables expand to the empty string. The result is a
validated :class:`showsync.models.config.SyncConfig`.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import tomli
from pydantic import ValidationError

from showsync.errors import ConfigError
from showsync.models.config import SyncConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SHOWSYNC_CONFIG"

_VAR_RE = re.compile(r"\$\{([A-Za-z0-9_]+)\}")

# (table, key) pairs that get ${NAME} substitution.
SUBSTITUTED_KEYS: Tuple[Tuple[str, str], ...] = (
    ("local", "default_dir"),
    ("remote", "tv_dir"),
    ("remote", "privkey"),
    ("log", "local_path"),
    ("lock", "path"),
)


def substitute_env_vars(value: str, env: Optional[Dict[str, str]] = None) -> str:
    """Replace every ``${NAME}`` in *value* with the environment variable.

    Example:
        >>> substitute_env_vars("${HOME}/tv", {"HOME": "/home/fry"})
        '/home/fry/tv'
    """
    env = os.environ if env is None else env
    return _VAR_RE.sub(lambda m: env.get(m.group(1), ""), value)


def config_search_paths() -> List[Path]:
    """Return candidate config locations in lookup order."""
    paths: List[Path] = []
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        paths.append(Path(explicit))
    home = os.environ.get("HOME")
    if home:
        paths.append(Path(home) / ".showsync" / "config.toml")
    paths.append(Path("/usr/share/showsync/config.toml"))
    paths.append(Path("config.toml"))
    return paths


def find_config_file() -> Path:
    """Return the first existing config file.

    Raises:
        ConfigError: None of the candidate locations exists.
    """
    candidates = config_search_paths()
    for path in candidates:
        if path.is_file():
            logger.debug("Using config file %s", path)
            return path
    searched = ", ".join(str(p) for p in candidates)
    raise ConfigError(f"No config file found. Looked in: {searched}")


def load_toml(path: Path) -> Dict[str, Any]:
    """Read a TOML file into a dict, wrapping read and syntax errors."""
    try:
        with path.open("rb") as f:
            return tomli.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def parse_config(data: Dict[str, Any], env: Optional[Dict[str, str]] = None) -> SyncConfig:
    """Validate raw config data, expanding ``${NAME}`` in path settings.

    Defaults that contain ``${NAME}`` are expanded too.

    Raises:
        ConfigError: The data does not describe a valid configuration.
    """
    try:
        config = SyncConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}") from e

    for table, key in SUBSTITUTED_KEYS:
        section = getattr(config, table)
        value = getattr(section, key)
        expanded = section.model_copy(update={key: substitute_env_vars(value, env)})
        setattr(config, table, expanded)
    return config


def load_config(path: Optional[Path] = None) -> SyncConfig:
    """Load the configuration from *path*, or from the first file found.

    Raises:
        ConfigError: No file found, unreadable, or invalid.
    """
    path = path or find_config_file()
    config = parse_config(load_toml(path))
    logger.debug("Loaded configuration from %s", path)
    return config
