"""Open a session for resolved settings."""

from __future__ import annotations

from typing import Any, Mapping

from p4settings.config.settings import P4Settings
from p4settings.session.address import ServerAddress
from p4settings.session.base import Session, SessionFactory, UsageOptions
from p4settings.session.registry import get_factory
from p4settings.utils.logging import get_logger

logger = get_logger(__name__)


def connect(
    settings: P4Settings,
    extra_params: Mapping[str, Any] | None = None,
    usage_options: UsageOptions | None = None,
    factory: SessionFactory | None = None,
) -> Session | None:
    """Get a session for ``settings.server_uri`` and connect it.

    The address is parsed before the factory is consulted, so a malformed
    URI raises AddressSyntaxError without any network activity. Errors
    from the factory or from ``Session.connect`` propagate unchanged.
    Returns None if the factory hands out no session.
    """
    address = ServerAddress.parse(settings.server_uri)
    if factory is None:
        factory = get_factory()

    logger.info(
        "session_connecting",
        factory=factory.factory_name,
        port=address.p4port,
        user=settings.user_name,
        client=settings.client_name,
    )
    session = factory.get_session(address, settings, extra_params, usage_options)
    if session is None:
        logger.warning("session_unavailable", factory=factory.factory_name, port=address.p4port)
        return None

    session.connect()
    logger.info("session_connected", port=address.p4port)
    return session
