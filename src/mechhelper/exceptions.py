"""Exception types raised by the mechhelper calculation core.

Every error derives from :class:`MechHelperError` so callers (UI code) can
catch the whole family in one place and decide how to present it.
"""

from __future__ import annotations

from typing import Any


class MechHelperError(Exception):
    """Base class for all mechhelper errors."""


class InvalidInputError(MechHelperError, ValueError):
    """Raised when caller-supplied input falls outside its valid range.

    Examples are a beam load position outside ``[0, L]``, a non-finite
    stiffness, or a display value that cannot be parsed as a number.
    """

    def __init__(self, message: str, parameter: str | None = None, value: Any = None):
        self.message = message
        self.parameter = parameter
        self.value = value
        super().__init__(self.message)


class ConfigurationError(MechHelperError, LookupError):
    """Raised for programming or configuration defects.

    An unregistered unit name, an unknown quantity class, or a malformed
    unit table all end up here.  These are never user input errors.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)
