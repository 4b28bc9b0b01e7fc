"""Reader for the local ``key=value`` settings file."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values


@dataclass(frozen=True)
class LoadedProperties:
    """Outcome of reading a settings file.

    ``warning`` is set when the file exists but could not be read; ``values``
    is empty in that case.
    """

    path: Path
    values: dict[str, str] = field(default_factory=dict)
    warning: str | None = None


def load_properties(path: Path) -> LoadedProperties:
    """Read ``path`` if it exists. Never raises."""
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        return LoadedProperties(path)
    except OSError as e:
        return LoadedProperties(path, warning=f"Could not read settings file {path}: {e}")

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        text = raw.decode("latin-1")

    return LoadedProperties(path, values=parse_properties(text))


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines into a flat mapping. Later keys win.

    Keys without a value are dropped. No ``${VAR}`` expansion is done, so
    passwords are taken literally.
    """
    parsed = dotenv_values(stream=io.StringIO(text), interpolate=False)
    return {key: value for key, value in parsed.items() if value is not None}
