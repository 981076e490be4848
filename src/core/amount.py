"""Operands for ledger operations.

An operand is either a fixed number or an inclusive integer range that is
resolved to one random draw at the moment the operation runs.

    Fixed(5)          → 5
    Range(1, 6)       → one of 1..6
    {"min": 1, "max": 6}   accepted and converted to Range(1, 6)
"""
from __future__ import annotations

import math
import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple, Union

from src.core.codec import is_number


@dataclass(frozen=True)
class Fixed:
    value: int | float


@dataclass(frozen=True)
class Range:
    min: int | float
    max: int | float


Amount = Union[Fixed, Range]


class BatchItem(NamedTuple):
    """One step of a batch call.  Plain ``(key, value)`` tuples work too."""
    key:   str
    value: Any


def randomize(lo: int | float, hi: int | float, rng: random.Random | None = None) -> int:
    """Uniform integer in [lo, hi], i.e. floor(random() * (hi - lo + 1) + lo)."""
    if lo > hi:
        raise ValueError(f"randomize: min {lo!r} > max {hi!r}")
    r = (rng or random).random()
    return math.floor(r * (hi - lo + 1) + lo)


def as_amount(value: Any) -> Amount:
    """Normalise a caller-supplied operand to Fixed or Range.

    Raises TypeError for anything that is neither a number, an Amount,
    nor a mapping with both ``min`` and ``max``.
    """
    if isinstance(value, (Fixed, Range)):
        return value
    if is_number(value):
        return Fixed(value)
    if isinstance(value, Mapping) and "min" in value and "max" in value:
        return Range(value["min"], value["max"])
    raise TypeError(f"unsupported amount: {value!r}")


def resolve(value: Any, rng: random.Random | None = None) -> int | float:
    amount = as_amount(value)
    if isinstance(amount, Range):
        if not (is_number(amount.min) and is_number(amount.max)):
            raise TypeError(f"range bounds must be numbers: {amount!r}")
        return randomize(amount.min, amount.max, rng)
    if not is_number(amount.value):
        raise TypeError(f"fixed amount must be a number: {amount!r}")
    return amount.value
