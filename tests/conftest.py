"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import pytest
import structlog

from p4settings.config import loader
from p4settings.config.settings import OVERRIDE_PREFIX, P4Settings
from p4settings.session import registry
from p4settings.session.base import SessionConnectError
from p4settings.utils.logging import use_stderr_defaults

SETTINGS_TEXT = """\
serverUri=p4java://filehost:1666
userName=alice
clientName=my-workspace
password=secret
"""


class FakeSession:
    """In-memory session that records connect/disconnect calls."""

    def __init__(self, address, settings, fail_connect: bool = False) -> None:
        self.address = address
        self.settings = settings
        self.connected = False
        self.connect_calls = 0
        self._fail_connect = fail_connect

    def connect(self) -> None:
        self.connect_calls += 1
        if self._fail_connect:
            raise SessionConnectError("Perforce password (P4PASSWD) invalid or unset.")
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def info(self) -> dict[str, str]:
        return {"serverAddress": self.address.p4port, "userName": self.settings.user_name}


class FakeFactory:
    """Session factory test double; instances are tracked on the class."""

    factory_name = "fake"
    instances: list[FakeFactory] = []
    fail_connect = False
    return_none = False

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.sessions: list[FakeSession] = []
        FakeFactory.instances.append(self)

    def get_session(
        self,
        address,
        settings,
        extra_params: Mapping[str, Any] | None = None,
        usage_options=None,
    ) -> FakeSession | None:
        self.calls.append((address, settings, extra_params, usage_options))
        if self.return_none:
            return None
        session = FakeSession(address, settings, fail_connect=self.fail_connect)
        self.sessions.append(session)
        return session


@pytest.fixture(autouse=True)
def clean_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Drop any runtime overrides inherited from the outer environment."""
    for key in P4Settings.setting_keys():
        monkeypatch.delenv(OVERRIDE_PREFIX + key, raising=False)


@pytest.fixture(autouse=True)
def reset_process_settings():
    """Forget the process-wide settings between tests."""
    loader._resolve_once.cache_clear()
    loader._load_config_file.cache_clear()
    yield
    loader._resolve_once.cache_clear()
    loader._load_config_file.cache_clear()


@pytest.fixture(autouse=True)
def stderr_logging():
    """Start every test from the unconfigured, stderr-only logging pipeline."""
    structlog.reset_defaults()
    use_stderr_defaults()
    yield
    structlog.reset_defaults()
    use_stderr_defaults()


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """A settings file providing all four values."""
    path = tmp_path / "PerforceSettings.txt"
    path.write_text(SETTINGS_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def fake_factory(monkeypatch: pytest.MonkeyPatch) -> type[FakeFactory]:
    """Register FakeFactory as 'fake' in an isolated registry."""
    monkeypatch.setattr(registry, "_REGISTRY", {})
    monkeypatch.setattr(registry, "_builtins_loaded", True)
    monkeypatch.setattr(FakeFactory, "instances", [])
    monkeypatch.setattr(FakeFactory, "fail_connect", False)
    monkeypatch.setattr(FakeFactory, "return_none", False)
    registry.register("fake", FakeFactory)
    return FakeFactory
