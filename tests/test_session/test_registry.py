"""Tests for the session factory registry and the P4Python factory."""

from __future__ import annotations

import pytest

from p4settings.config.settings import P4Settings
from p4settings.session import registry
from p4settings.session.address import ServerAddress
from p4settings.session.base import SessionConnectError, SessionError, UsageOptions


def test_unknown_factory(fake_factory):
    with pytest.raises(SessionError, match="Available factories: fake"):
        registry.get_factory("nope")


def test_registered_factory(fake_factory):
    assert registry.available_factories() == ["fake"]
    assert registry.get_factory("fake").factory_name == "fake"


def test_p4python_registered_when_installed():
    pytest.importorskip("P4")
    assert "p4python" in registry.available_factories()


def test_p4python_session_configuration():
    pytest.importorskip("P4")
    from p4settings.session.p4python import P4PythonSessionFactory

    settings = P4Settings(userName="alice", clientName="my-workspace", password="secret")
    address = ServerAddress.parse("p4javassl://perforce.example.com:1666")
    options = UsageOptions(program_name="demo", program_version="2.0")

    session = P4PythonSessionFactory().get_session(address, settings, usage_options=options)

    assert not session.connected
    assert session.p4.port == "ssl:perforce.example.com:1666"
    assert session.p4.user == "alice"
    assert session.p4.client == "my-workspace"
    assert session.p4.prog == "demo"


def test_p4python_connect_refused():
    pytest.importorskip("P4")
    from p4settings.session.p4python import P4PythonSessionFactory

    session = P4PythonSessionFactory().get_session(
        ServerAddress.parse("p4java://127.0.0.1:1"), P4Settings()
    )

    with pytest.raises(SessionConnectError):
        session.connect()


@pytest.mark.parametrize("name", ["chrset", "run_info", "_p4"])
def test_p4python_rejects_unknown_parameters(name: str):
    """Misspelled or non-attribute parameter names are refused, not silently set."""
    pytest.importorskip("P4")
    from p4settings.session.p4python import P4PythonSessionFactory

    with pytest.raises(SessionConnectError, match="Unknown connection parameter"):
        P4PythonSessionFactory().get_session(
            ServerAddress.parse("p4java://127.0.0.1:1666"),
            P4Settings(),
            extra_params={name: "utf8"},
        )


def test_p4python_applies_known_parameters():
    pytest.importorskip("P4")
    from p4settings.session.p4python import P4PythonSessionFactory

    session = P4PythonSessionFactory().get_session(
        ServerAddress.parse("p4java://127.0.0.1:1666"),
        P4Settings(),
        extra_params={"charset": "utf8"},
    )

    assert session.p4.charset == "utf8"
