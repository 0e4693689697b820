"""Shared utilities for the mechhelper core.

Provides:
- Unit table loading from YAML configuration
- Section property calculations (rectangular and circular)
- Small numeric guards shared by the solvers
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError, InvalidInputError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Unit table loading
# ---------------------------------------------------------------------------

UNIT_TABLES_PATH = Path(__file__).resolve().parent / "config" / "unit_tables.yaml"

_unit_tables_cache: dict[str, Any] | None = None


def read_unit_tables(path: str | Path) -> dict[str, Any]:
    """Read and parse a unit table YAML file.

    Parameters
    ----------
    path : str or Path
        Location of the YAML file.

    Returns
    -------
    dict
        Parsed YAML content keyed by quantity class (``density``,
        ``modulus``, ``strength``, ...).

    Raises
    ------
    ConfigurationError
        If the file does not exist, is not valid YAML, or its root is not a
        mapping.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Unit table not found: {path}")

    try:
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Unit table {path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Unit table {path} must be a mapping at the root")

    logger.debug("Loaded unit table %s (%d quantity classes)", path, len(data))
    return data


def load_unit_tables() -> dict[str, Any]:
    """Load the packaged unit table.

    The result is cached so that repeated calls do not re-read from disk.
    The cached mapping is treated as read-only by every caller.
    """
    global _unit_tables_cache
    if _unit_tables_cache is not None:
        return _unit_tables_cache

    _unit_tables_cache = read_unit_tables(UNIT_TABLES_PATH)
    return _unit_tables_cache


def _clear_unit_tables_cache() -> None:
    """Reset the internal cache (useful in tests)."""
    global _unit_tables_cache
    _unit_tables_cache = None


# ---------------------------------------------------------------------------
# Section properties
# ---------------------------------------------------------------------------

def rectangular_inertia(width: float, depth: float) -> float:
    """Second moment of area (I) of a solid rectangular section about the
    axis parallel to ``width``.

    ``I = b * h^3 / 12``

    Parameters
    ----------
    width : float
        Base (b).
    depth : float
        Height (h): the dimension perpendicular to the bending axis.

    Returns
    -------
    float
        Moment of inertia in consistent units to the fourth power.
    """
    return width * depth**3 / 12.0


def circular_inertia(diameter: float) -> float:
    """Second moment of area (I) of a solid circular section.

    ``I = pi * d^4 / 64``
    """
    return math.pi * diameter**4 / 64.0


# ---------------------------------------------------------------------------
# Numeric guards
# ---------------------------------------------------------------------------

def require_finite(**values: float) -> None:
    """Raise :class:`InvalidInputError` if any keyword value is NaN or infinite."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidInputError(
                f"{name} must be a finite number, got {value!r}",
                parameter=name,
                value=value,
            )
