"""Scanner options and loxscan.toml loading."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

from loxscan.errors import ConfigError

ErrorPolicy = Literal["skip", "stop"]

CONFIG_FILENAME = "loxscan.toml"

_POLICIES: tuple[ErrorPolicy, ...] = ("skip", "stop")


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """How a Scanner reacts to malformed input and which tokens it yields.

    ``on_error="skip"`` steps over the offending input and keeps scanning;
    ``on_error="stop"`` ends the sequence right after the first error.
    """

    on_error: ErrorPolicy = "skip"
    skip_trivia: bool = False


def load_config(config_path: Path | None, directory: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else directory / CONFIG_FILENAME

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def options_from_config(config: dict[str, Any]) -> ScanOptions:
    """Build ScanOptions from the ``[scanner]`` table of a loaded config.

    Missing keys fall back to the ScanOptions defaults.
    """
    table = config.get("scanner")
    if table is None:
        return ScanOptions()
    if not isinstance(table, dict):
        raise ConfigError("expected a table", "scanner")

    on_error = table.get("on_error", "skip")
    if on_error not in _POLICIES:
        raise ConfigError(
            f"expected one of {', '.join(_POLICIES)}, got {on_error!r}", "scanner.on_error"
        )

    skip_trivia = table.get("skip_trivia", False)
    if not isinstance(skip_trivia, bool):
        raise ConfigError(f"expected true or false, got {skip_trivia!r}", "scanner.skip_trivia")

    return ScanOptions(on_error=on_error, skip_trivia=skip_trivia)
