"""Runtime settings read from the environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings, set via ``HELM_OVERRIDES_*`` environment variables.

    ``log`` is a stdlib level name (``DEBUG``, ``INFO``...); ``no_color``
    disables styled CLI output.
    """

    model_config = SettingsConfigDict(env_prefix="HELM_OVERRIDES_")

    log: str | None = None
    no_color: bool = False
