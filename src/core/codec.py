"""Number <-> stored text.

Values are written as JSON numeric literals, so ``NaN``, ``Infinity`` and
``-Infinity`` survive a round-trip.  ``null`` is read back as 0.
"""
from __future__ import annotations

import json
from numbers import Real

from src.core.constants import DEFAULT_VALUE
from src.core.errors import DecodeFault


def is_number(value: object) -> bool:
    """True for int / float (and other reals), False for bool."""
    return isinstance(value, Real) and not isinstance(value, bool)


def encode_number(value: int | float) -> str:
    if not is_number(value):
        raise TypeError(f"not a number: {value!r}")
    return json.dumps(value)


def decode_number(raw: str | None) -> int | float:
    """Decode stored text.  Absent (None) and ``null`` decode to 0."""
    if raw is None:
        return DEFAULT_VALUE
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise DecodeFault(f"invalid stored text {raw!r}: {exc}") from exc
    if data is None:
        return DEFAULT_VALUE
    if not is_number(data):
        raise DecodeFault(f"stored value is not a number: {raw!r}")
    return data
