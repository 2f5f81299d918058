"""Store settings.

Settings are plain values handed to :class:`~aiorepostate.store.RepositoryStore`;
no environment variables are read.  :func:`load_settings` reads them from an
optional YAML file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiofiles
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class StoreSettings(BaseModel):
    """Tunables for the synchronization store."""

    model_config = ConfigDict(frozen=True)

    commits_per_page: int = Field(default=100, gt=0)
    error_toast_seconds: float = Field(default=10.0, gt=0)
    success_toast_seconds: float = Field(default=3.0, gt=0)
    short_hash_length: int = Field(default=7, gt=0)


async def load_settings(path: Path) -> StoreSettings:
    """Load settings from the YAML file at *path*.

    A missing file yields the defaults.  Raises :class:`ConfigError` when the
    file cannot be read, is not valid YAML, or holds invalid values.
    """
    if not path.exists():
        logger.debug("No settings file at %s, using defaults", path)
        return StoreSettings()

    try:
        async with aiofiles.open(path, encoding="utf-8") as fh:
            content = await fh.read()
    except OSError as exc:
        logger.error("Error reading settings %s: %s", path, exc)
        raise ConfigError(f"Cannot read settings file {path}: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if data is None:
        return StoreSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    try:
        settings = StoreSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings in {path}: {exc}") from exc

    logger.info("Loaded settings from %s", path)
    return settings
