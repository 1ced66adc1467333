from __future__ import annotations
"""Helpers for coercing loosely typed configuration values to numbers.

Config files are hand edited, so a value may arrive as ``"0.9"`` instead of
``0.9``.  These helpers accept such values and fall back to a default (with
a logged warning) when a value cannot be read as a finite number.
"""

from typing import Any
import math
import logging

logger = logging.getLogger(__name__)


def to_int(value: Any, default: int = 0) -> int:
    """Coerce ``value`` to ``int``.

    Integral floats and integer-looking strings are accepted.  Booleans,
    fractional or non finite values trigger a warning and ``default`` is
    returned instead.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        s = value.strip()
        if s and (s.isdigit() or (s[0] in {"+", "-"} and s[1:].isdigit())):
            return int(s)
    if value is None:
        return default
    logger.warning("to_int: coercing %r to default %r", value, default)
    return default


def to_float(value: Any, default: float = 0.0) -> float:
    """Coerce ``value`` to a finite ``float``.

    Strings are parsed with ``float``.  Booleans, non finite floats or
    invalid inputs emit a warning and ``default`` is returned.
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        f = float(value)
        if math.isfinite(f):
            return f
    elif isinstance(value, str):
        try:
            f = float(value.strip())
        except ValueError:
            f = math.nan
        if math.isfinite(f):
            return f
    elif value is None:
        return default
    logger.warning("to_float: coercing %r to default %r", value, default)
    return default


def to_color(value: Any, default: int = 0) -> int:
    """Coerce a packed ``0xRRGGBB`` color.

    Accepts ints and strings such as ``"#81a1c1"``, ``"0x81a1c1"`` or
    ``"81a1c1"``.  Anything else, or a value outside ``0..0xFFFFFF``, logs a
    warning and returns ``default``.
    """
    c = None
    if isinstance(value, int) and not isinstance(value, bool):
        c = value
    elif isinstance(value, str):
        s = value.strip().lower()
        if s.startswith("#"):
            s = s[1:]
        elif s.startswith("0x"):
            s = s[2:]
        try:
            c = int(s, 16)
        except ValueError:
            c = None
    elif value is None:
        return default
    if c is not None and 0 <= c <= 0xFFFFFF:
        return c
    logger.warning("to_color: coercing %r to default %#08x", value, default)
    return default
