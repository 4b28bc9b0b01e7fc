"""Settings sources for the runtime-override and settings-file tiers."""

from __future__ import annotations

import os
from abc import abstractmethod
from typing import Any, Mapping

from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

OVERRIDE_PREFIX = "com.perforce.p4settings."


class LookupSource(PydanticBaseSettingsSource):
    """Source backed by a string mapping; empty values count as absent."""

    @abstractmethod
    def lookup(self, key: str) -> str | None:
        """Value for a setting key such as ``serverUri``, or None."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        key = field.alias or field_name
        return self.lookup(key), key, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value:
                data[key] = value
        return data


class RuntimeOverrideSource(LookupSource):
    """Values named ``com.perforce.p4settings.<key>`` in the process environment.

    Any mapping may stand in for the environment, which keeps resolution
    testable without touching ``os.environ``.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        overrides: Mapping[str, str] | None = None,
        prefix: str = OVERRIDE_PREFIX,
    ) -> None:
        super().__init__(settings_cls)
        self._overrides = os.environ if overrides is None else overrides
        self._prefix = prefix

    def lookup(self, key: str) -> str | None:
        return self._overrides.get(self._prefix + key) or None


class PropertiesFileSource(LookupSource):
    """Values already read from the local settings file."""

    def __init__(self, settings_cls: type[BaseSettings], values: Mapping[str, str]) -> None:
        super().__init__(settings_cls)
        self._values = values

    def lookup(self, key: str) -> str | None:
        return self._values.get(key) or None
