"""Session and SessionFactory protocols and supporting types."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Protocol, runtime_checkable

if TYPE_CHECKING:
    from p4settings.config.settings import P4Settings
    from p4settings.session.address import ServerAddress

DEFAULT_PROGRAM_NAME = "p4settings"
DEFAULT_PROGRAM_VERSION = "0.1.0"


class SessionError(ConnectionError):
    """Base exception for all session failures."""


class AddressSyntaxError(SessionError):
    """The server URI could not be parsed. Raised before any network call."""


class SessionConnectError(SessionError):
    """The server rejected or could not complete the connection."""


@dataclass(frozen=True)
class UsageOptions:
    """How this program identifies itself to the server."""

    program_name: str = DEFAULT_PROGRAM_NAME
    program_version: str = DEFAULT_PROGRAM_VERSION
    working_directory: Path | None = None


@runtime_checkable
class Session(Protocol):
    """A server session handed out by a factory, not yet connected."""

    @property
    def connected(self) -> bool:
        ...

    def connect(self) -> None:
        """Open the connection. Raises SessionConnectError on failure."""
        ...

    def disconnect(self) -> None:
        ...

    def info(self) -> Mapping[str, str]:
        """Server information for a connected session."""
        ...


@runtime_checkable
class SessionFactory(Protocol):
    """Contract every session backend must fulfill.

    Uses structural subtyping, so test doubles need not inherit from it.
    """

    @property
    def factory_name(self) -> str:
        """Short identifier, e.g. 'p4python'."""
        ...

    def get_session(
        self,
        address: ServerAddress,
        settings: P4Settings,
        extra_params: Mapping[str, Any] | None = None,
        usage_options: UsageOptions | None = None,
    ) -> Session | None:
        """Build a session for ``address``. May return None."""
        ...
