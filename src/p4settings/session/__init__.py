"""Server sessions built from resolved settings."""

from p4settings.session.address import ServerAddress
from p4settings.session.base import (
    AddressSyntaxError,
    Session,
    SessionConnectError,
    SessionError,
    SessionFactory,
    UsageOptions,
)
from p4settings.session.connect import connect
from p4settings.session.registry import available_factories, get_factory, register

__all__ = [
    "AddressSyntaxError",
    "ServerAddress",
    "Session",
    "SessionConnectError",
    "SessionError",
    "SessionFactory",
    "UsageOptions",
    "available_factories",
    "connect",
    "get_factory",
    "register",
]
