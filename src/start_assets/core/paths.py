"""Configuration directory discovery."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from start_assets.core.models import ConfigScope

APP_DIR_NAME = "start"
LOCAL_DIR_NAME = ".start"


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved directories for both scopes plus the cache directory.

    Resolved once at CLI entry point and stored in AppContext.
    """

    global_dir: Path
    local_dir: Path
    cache_dir: Path

    def dir_for(self, scope: ConfigScope) -> Path:
        if scope is ConfigScope.LOCAL:
            return self.local_dir
        return self.global_dir


def resolve_paths(cwd: Path, env: Mapping[str, str] | None = None) -> ConfigPaths:
    """Resolve scope directories, honouring XDG_CONFIG_HOME and XDG_CACHE_HOME.

    Args:
        cwd: Working directory used for the local scope
        env: Environment mapping (defaults to os.environ)

    Returns:
        ConfigPaths with global, local and cache directories
    """
    if env is None:
        env = os.environ

    config_home = env.get("XDG_CONFIG_HOME")
    if config_home:
        global_dir = Path(config_home) / APP_DIR_NAME
    else:
        global_dir = Path.home() / ".config" / APP_DIR_NAME

    cache_home = env.get("XDG_CACHE_HOME")
    if cache_home:
        cache_dir = Path(cache_home) / APP_DIR_NAME
    else:
        cache_dir = Path.home() / ".cache" / APP_DIR_NAME

    return ConfigPaths(
        global_dir=global_dir,
        local_dir=cwd / LOCAL_DIR_NAME,
        cache_dir=cache_dir,
    )
