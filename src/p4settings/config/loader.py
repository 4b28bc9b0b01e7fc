"""Settings resolution: runtime override > settings file > defaults."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from p4settings.config.properties import LoadedProperties, load_properties
from p4settings.config.settings import P4Settings
from p4settings.config.sources import PropertiesFileSource, RuntimeOverrideSource
from p4settings.utils.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE = Path("PerforceSettings.txt")


class SettingSource(str, Enum):
    """Tier a resolved value came from."""

    OVERRIDE = "override"
    FILE = "file"
    DEFAULT = "default"


@dataclass(frozen=True)
class Resolution:
    """Resolved settings plus where each value came from.

    ``warning`` carries the reason the settings file was ignored, if it
    existed but could not be read. The caller decides how to surface it.
    """

    settings: P4Settings
    sources: Mapping[str, SettingSource]
    config_file: Path
    warning: str | None = None


def resolve(
    key: str,
    default: str,
    overrides: Mapping[str, str] | None = None,
    file_values: Mapping[str, str] | None = None,
) -> str:
    """Resolve a single key through the override and file tiers, else ``default``.

    Without ``file_values`` the process-wide settings file is used; it is
    read at most once per process.
    """
    if file_values is None:
        file_values = _shared_file().values
    chain = (
        RuntimeOverrideSource(P4Settings, overrides),
        PropertiesFileSource(P4Settings, file_values),
    )
    for source in chain:
        value = source.lookup(key)
        if value:
            return value
    return default


def resolve_settings(
    config_file: Path | str = CONFIG_FILE,
    overrides: Mapping[str, str] | None = None,
) -> Resolution:
    """Read the settings file once and resolve all four settings.

    Never raises for file problems: a missing file behaves as empty, an
    unreadable one behaves as empty and sets ``Resolution.warning``.
    """
    return _build_resolution(load_properties(Path(config_file)), overrides)


def _build_resolution(
    loaded: LoadedProperties, overrides: Mapping[str, str] | None
) -> Resolution:
    tiers = (
        (SettingSource.OVERRIDE, RuntimeOverrideSource(P4Settings, overrides)),
        (SettingSource.FILE, PropertiesFileSource(P4Settings, loaded.values)),
    )
    settings = P4Settings.from_sources(*(source for _, source in tiers))

    supplied = [(origin, source()) for origin, source in tiers]
    origins = {
        key: next((origin for origin, data in supplied if key in data), SettingSource.DEFAULT)
        for key in P4Settings.setting_keys()
    }

    return Resolution(
        settings=settings,
        sources=MappingProxyType(origins),
        config_file=loaded.path,
        warning=loaded.warning,
    )


_init_lock = threading.RLock()


@lru_cache(maxsize=1)
def _load_config_file() -> LoadedProperties:
    loaded = load_properties(CONFIG_FILE)
    if loaded.warning:
        logger.warning(
            "settings_file_unreadable",
            path=str(loaded.path),
            reason=loaded.warning,
        )
    return loaded


def _shared_file() -> LoadedProperties:
    with _init_lock:
        return _load_config_file()


@lru_cache(maxsize=1)
def _resolve_once() -> Resolution:
    return _build_resolution(_shared_file(), None)


def get_settings() -> P4Settings:
    """Process-wide settings, resolved on first call and reused afterwards."""
    with _init_lock:
        return _resolve_once().settings
