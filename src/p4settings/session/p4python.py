"""Session factory backed by the P4Python client library."""

from __future__ import annotations

from typing import Any, Mapping

from P4 import P4, P4Exception

from p4settings.config.settings import P4Settings
from p4settings.session.address import ServerAddress
from p4settings.session.base import SessionConnectError, UsageOptions
from p4settings.utils.logging import get_logger

logger = get_logger(__name__)

_MISSING = object()


class P4PythonSession:
    """Wraps a ``P4`` instance; lifetime is owned by the caller."""

    def __init__(self, p4: P4) -> None:
        self._p4 = p4

    @property
    def p4(self) -> P4:
        """The underlying P4Python handle, for running commands."""
        return self._p4

    @property
    def connected(self) -> bool:
        return bool(self._p4.connected())

    def connect(self) -> None:
        try:
            self._p4.connect()
        except P4Exception as e:
            raise SessionConnectError(f"Could not connect to {self._p4.port}: {e}") from e

    def disconnect(self) -> None:
        if self._p4.connected():
            self._p4.disconnect()

    def info(self) -> dict[str, str]:
        try:
            records = self._p4.run_info()
        except P4Exception as e:
            raise SessionConnectError(f"'p4 info' failed on {self._p4.port}: {e}") from e
        if not records:
            return {}
        return {key: str(value) for key, value in records[0].items()}

    def __enter__(self) -> P4PythonSession:
        if not self.connected:
            self.connect()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()


class P4PythonSessionFactory:
    """Builds P4Python sessions from resolved settings."""

    factory_name = "p4python"

    def get_session(
        self,
        address: ServerAddress,
        settings: P4Settings,
        extra_params: Mapping[str, Any] | None = None,
        usage_options: UsageOptions | None = None,
    ) -> P4PythonSession:
        options = usage_options or UsageOptions()

        p4 = P4()
        p4.port = address.p4port
        p4.user = settings.user_name
        p4.client = settings.client_name
        p4.password = settings.password.get_secret_value()
        p4.prog = options.program_name
        p4.version = options.program_version
        if options.working_directory is not None:
            p4.cwd = str(options.working_directory)

        # URI query properties first, explicit parameters win
        params = {**address.properties, **(extra_params or {})}
        for name, value in params.items():
            current = getattr(p4, name, _MISSING) if not name.startswith("_") else _MISSING
            if current is _MISSING or callable(current):
                raise SessionConnectError(f"Unknown connection parameter {name!r}")
            try:
                setattr(p4, name, value)
            except (AttributeError, TypeError, P4Exception) as e:
                raise SessionConnectError(
                    f"Invalid connection parameter {name}={value!r}: {e}"
                ) from e

        logger.debug("session_built", factory=self.factory_name, port=p4.port, params=sorted(params))
        return P4PythonSession(p4)
