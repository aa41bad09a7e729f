"""Logger lookup under the ``loxscan.`` namespace.

The library never installs handlers; applications configure logging.
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger whose name carries the loxscan prefix."""
    if not (name == "loxscan" or name.startswith("loxscan.")):
        name = f"loxscan.{name}"
    return logging.getLogger(name)
