"""Typed Perforce connection settings using pydantic-settings."""

from __future__ import annotations

from contextvars import ContextVar

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from p4settings.config.sources import OVERRIDE_PREFIX, RuntimeOverrideSource

__all__ = ["OVERRIDE_PREFIX", "P4Settings"]

DEFAULT_SERVER_URI = "p4java://your_ip_address:1666"
DEFAULT_USER_NAME = "your_id"
DEFAULT_CLIENT_NAME = "your_workspace_name"
DEFAULT_PASSWORD = "your_password"

# Tiers for the settings object currently being built, highest priority first
_tiers: ContextVar[tuple[PydanticBaseSettingsSource, ...] | None] = ContextVar(
    "p4settings_tiers", default=None
)


class P4Settings(BaseSettings):
    """The four resolved connection settings.

    Field aliases are the keys used in the settings file and in runtime
    overrides. Instances are frozen. Built without explicit tiers, only
    keyword arguments and runtime overrides apply; the loader supplies the
    settings-file tier through ``from_sources``.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    server_uri: str = Field(
        default=DEFAULT_SERVER_URI,
        alias="serverUri",
        description="Server URI handed to the session factory",
    )
    user_name: str = Field(default=DEFAULT_USER_NAME, alias="userName")
    client_name: str = Field(
        default=DEFAULT_CLIENT_NAME,
        alias="clientName",
        description="Workspace (client) name",
    )
    password: SecretStr = Field(default=SecretStr(DEFAULT_PASSWORD), alias="password")

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        tiers = _tiers.get()
        if tiers is None:
            tiers = (RuntimeOverrideSource(settings_cls),)
        return (kwargs["init_settings"], *tiers)

    @classmethod
    def from_sources(cls, *sources: PydanticBaseSettingsSource) -> P4Settings:
        """Build settings from ``sources``, highest priority first, then defaults."""
        token = _tiers.set(sources)
        try:
            return cls()
        finally:
            _tiers.reset(token)

    @classmethod
    def setting_keys(cls) -> tuple[str, ...]:
        """Setting keys in declaration order, e.g. ``serverUri``."""
        return tuple(field.alias or name for name, field in cls.model_fields.items())

    def as_properties(self, reveal: bool = False) -> dict[str, str]:
        """Settings keyed by their property name; the password is masked unless ``reveal``."""
        password = self.password.get_secret_value() if reveal else "********"
        return {
            "serverUri": self.server_uri,
            "userName": self.user_name,
            "clientName": self.client_name,
            "password": password,
        }
