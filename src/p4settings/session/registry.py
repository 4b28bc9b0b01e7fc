# Session factory registry — maps factory names to factory classes.

from __future__ import annotations

from p4settings.session.base import SessionError, SessionFactory

DEFAULT_FACTORY = "p4python"

_REGISTRY: dict[str, type] = {}
_builtins_loaded = False


def register(key: str, cls: type) -> None:
    """Register a session factory class under a name."""
    _REGISTRY[key] = cls


def get_factory(key: str | None = None) -> SessionFactory:
    """Create a session factory by name.

    Lazy-imports built-in factories so their client libraries are only
    needed when used.
    """
    key = key or DEFAULT_FACTORY
    _load_builtins()

    if key not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY.keys())) or "none"
        hint = " (install the 'p4' extra for P4Python)" if key == DEFAULT_FACTORY else ""
        raise SessionError(
            f"Unknown session factory '{key}'{hint}. Available factories: {available}"
        )

    return _REGISTRY[key]()  # type: ignore[no-any-return]


def _load_builtins() -> None:
    """Lazy-import built-in factories to populate the registry."""
    global _builtins_loaded
    if _builtins_loaded:
        return
    _builtins_loaded = True

    try:
        from p4settings.session.p4python import P4PythonSessionFactory

        register(DEFAULT_FACTORY, P4PythonSessionFactory)
    except ImportError:
        pass


def available_factories() -> list[str]:
    """Return list of registered factory names."""
    _load_builtins()
    return sorted(_REGISTRY.keys())
