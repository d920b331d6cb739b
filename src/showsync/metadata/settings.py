# WARNING: Never commit your .env file or share your API tokens.
# Ensure .env is listed in .gitignore!

"""Settings loader for metadata provider credentials.

Loads the TMDB read access token from the environment or a ``.env`` file. A
token set in ``config.toml`` takes precedence; see
:func:`showsync.resolvers.factory.build_resolver`.

Recognised keys:
- TMDB_READ_ACCESS_TOKEN (optional; the TMDB resolver is disabled without it)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Metadata provider credentials."""

    TMDB_READ_ACCESS_TOKEN: str | None = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
