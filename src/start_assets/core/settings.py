"""Settings loaded from settings.toml in either scope.

    [settings]
    assets_index = "https://example.com/start-assets/index.yaml"

Local settings override global ones. The START_ASSETS_INDEX environment
variable overrides both.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import tomli

from start_assets.core.errors import StoreError
from start_assets.core.models import ConfigScope
from start_assets.core.paths import ConfigPaths

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.toml"
ASSETS_INDEX_ENV = "START_ASSETS_INDEX"
DEFAULT_ASSETS_INDEX = (
    "https://raw.githubusercontent.com/grantcarthew/start-assets/main/index.yaml"
)


@dataclass(frozen=True)
class Settings:
    """Immutable settings.

    Loaded once at CLI entry point and stored in AppContext.
    """

    assets_index: str = DEFAULT_ASSETS_INDEX


def _read_settings_table(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise StoreError(f"Invalid TOML in {path}: {e}") from e

    table = data.get("settings", {})
    if not isinstance(table, dict):
        raise StoreError(f"'settings' in {path} must be a table")
    return table


def load_settings(paths: ConfigPaths, env: Mapping[str, str] | None = None) -> Settings:
    """Merge global and local settings.toml, then apply environment overrides.

    Raises:
        StoreError: If a settings file exists but cannot be parsed
    """
    if env is None:
        env = os.environ

    merged: dict = {}
    for scope in (ConfigScope.GLOBAL, ConfigScope.LOCAL):
        path = paths.dir_for(scope) / SETTINGS_FILE
        table = _read_settings_table(path)
        if table:
            logger.debug("Loaded settings from %s", path)
        merged.update(table)

    assets_index = str(merged.get("assets_index") or DEFAULT_ASSETS_INDEX)
    override = env.get(ASSETS_INDEX_ENV)
    if override:
        logger.debug("Using %s=%s", ASSETS_INDEX_ENV, override)
        assets_index = override

    return Settings(assets_index=assets_index)
