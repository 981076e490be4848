"""Ledger — numeric economy counters on top of a KeyValueStore.

Each counter is one store entry holding a numeric literal.  The ledger keeps
no state of its own; every operation is a single read → compute → write
against the store.

Operations
----------
get / set / add / sub / mul / div      scalar, on one key
delete / reset (alias res)             remove one key / every key
randomize                              integer in [min, max]
batch_get / batch_set / batch_add / batch_sub / batch_mul / batch_div /
batch_delete                           the scalar op applied item by item

Operands may be a number, ``Fixed(n)``, ``Range(lo, hi)`` or a mapping with
``min`` and ``max``; a range is drawn once, when its operation runs.

Error containment
-----------------
No operation raises.  Failures are reported through ``log(level, message)``
with the operation name and key, and the call degrades to a safe default:
reads return 0 (``{}`` for batch_get), writes are dropped.  ``sub`` and
``div`` results are floor-clamped to 0; NaN is stored as-is.

Batch calls carry a second guard around the loop itself: a bad item (one
that cannot be read as key/value) stops the batch and is logged once, while
a failing scalar op only loses that one item.  Nothing is rolled back.
"""
from __future__ import annotations

import math
import operator
import random
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Callable

from src.core.amount import resolve, randomize as _randomize
from src.core.codec import decode_number, encode_number
from src.core.constants import (
    DEFAULT_VALUE, CLAMP_FLOOR, DEFAULT_RESET_SCOPE, RESET_SCOPES,
)
from src.core.errors import StoreFault
from src.core.prefix import make_key, strip_key
from src.core.store import KeyValueStore, create_store
from src.utils.log import LogFn, null_log, make_stream_log

if TYPE_CHECKING:
    from src.core.settings_manager import SettingsManager

Number = int | float


# ---------------------------------------------------------------------------
# Arithmetic helpers
# ---------------------------------------------------------------------------

def _is_nan(value: Number) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _clamp(value: Number) -> Number:
    """Floor at 0, leaving NaN untouched."""
    if _is_nan(value):
        return value
    return max(CLAMP_FLOOR, value)


def _to_float(value: Number) -> float:
    """float(value), saturating ints too large for a float to ±inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def _native(op: Callable[[Number, Number], Number], a: Number, b: Number) -> Number:
    """Apply ``op`` with float overflow semantics instead of OverflowError."""
    try:
        return op(a, b)
    except OverflowError:
        if isinstance(a, int) and isinstance(b, int):
            # int / int whose quotient exceeds the float range
            return math.inf if (a > 0) == (b > 0) else -math.inf
        return op(_to_float(a), _to_float(b))


def _divide(a: Number, b: Number) -> Number:
    """IEEE-754 division: x/0 → ±inf, 0/0 → nan."""
    if b == 0:
        if a == 0 or _is_nan(a):
            return math.nan
        return math.copysign(math.inf, _to_float(a)) * math.copysign(1.0, b)
    return _native(operator.truediv, a, b)


def _unpack(item: Any) -> tuple[str, Any]:
    if isinstance(item, Mapping):
        return item["key"], item["value"]
    key, value = item
    return key, value


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class Ledger:
    """Façade over a KeyValueStore exposing numeric counter operations."""

    def __init__(
        self,
        store:       KeyValueStore,
        log:         LogFn | None = None,
        rng:         random.Random | None = None,
        namespace:   str = "",
        reset_scope: str = DEFAULT_RESET_SCOPE,
    ) -> None:
        if reset_scope not in RESET_SCOPES:
            raise ValueError(f"reset_scope must be one of {RESET_SCOPES}, got {reset_scope!r}")
        self._store       = store
        self._log         = log or null_log
        self._rng         = rng or random.Random()
        self._namespace   = namespace
        self._reset_scope = reset_scope

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def namespace(self) -> str:
        return self._namespace

    # ------------------------------------------------------------------
    # Fallible inner routines
    # ------------------------------------------------------------------

    def _read(self, key: str) -> Number:
        return decode_number(self._store.get_item(make_key(self._namespace, key)))

    def _write(self, key: str, value: Number) -> None:
        self._store.set_item(make_key(self._namespace, key), encode_number(value))
        self._log("DEBUG", f"{key} = {value!r}")

    def _report(self, op: str, key: str | None, exc: Exception) -> None:
        level  = "ERROR" if isinstance(exc, StoreFault) else "WARNING"
        target = f" '{key}'" if key is not None else ""
        self._log(level, f"{op}{target}: {exc}")

    def _apply(
        self,
        op:      str,
        key:     str,
        amount:  Any,
        combine: Callable[[Number, Number], Number],
    ) -> None:
        try:
            operand = resolve(amount, self._rng)
            self._write(key, combine(self.get(key), operand))
        except Exception as exc:
            self._report(op, key, exc)

    def _batch(
        self,
        op:     str,
        scalar: Callable[[str, Any], None],
        items:  Iterable[Any],
    ) -> None:
        try:
            for item in items:
                key, value = _unpack(item)
                scalar(key, value)
        except Exception as exc:
            self._report(op, None, exc)

    # ------------------------------------------------------------------
    # Scalar operations
    # ------------------------------------------------------------------

    def get(self, key: str) -> Number:
        """Current value of ``key``; 0 if absent or unreadable."""
        try:
            return self._read(key)
        except Exception as exc:
            self._report("get", key, exc)
            return DEFAULT_VALUE

    def set(self, key: str, value: Any) -> None:
        try:
            self._write(key, resolve(value, self._rng))
        except Exception as exc:
            self._report("set", key, exc)

    def add(self, key: str, amount: Any) -> None:
        self._apply("add", key, amount, lambda cur, n: _native(operator.add, cur, n))

    def sub(self, key: str, amount: Any) -> None:
        self._apply("sub", key, amount, lambda cur, n: _clamp(_native(operator.sub, cur, n)))

    def mul(self, key: str, amount: Any) -> None:
        self._apply("mul", key, amount, lambda cur, n: _native(operator.mul, cur, n))

    def div(self, key: str, amount: Any) -> None:
        self._apply("div", key, amount, lambda cur, n: _clamp(_divide(cur, n)))

    def delete(self, key: str) -> None:
        try:
            self._store.remove_item(make_key(self._namespace, key))
            self._log("DEBUG", f"{key} deleted")
        except Exception as exc:
            self._report("delete", key, exc)

    def reset(self) -> None:
        """Remove every entry.

        With the default ``reset_scope="all"`` this clears the whole store,
        including entries the ledger did not write.  With
        ``reset_scope="namespace"`` and a namespace set, only keys under the
        namespace are removed.
        """
        try:
            if self._reset_scope == "namespace" and self._namespace:
                for stored in self._store.keys():
                    if strip_key(self._namespace, stored) is not None:
                        self._store.remove_item(stored)
            else:
                self._store.clear()
            self._log("INFO", "ledger reset")
        except Exception as exc:
            self._report("reset", None, exc)

    res = reset

    def randomize(self, lo: Number, hi: Number) -> int:
        """Uniform integer in [lo, hi]; 0 (logged) for unusable bounds."""
        try:
            return _randomize(lo, hi, self._rng)
        except Exception as exc:
            self._report("randomize", None, exc)
            return DEFAULT_VALUE

    def keys(self) -> list[str]:
        """Keys visible to this ledger, without the namespace prefix."""
        try:
            visible = (strip_key(self._namespace, k) for k in self._store.keys())
            return [k for k in visible if k is not None]
        except Exception as exc:
            self._report("keys", None, exc)
            return []

    def snapshot(self) -> dict[str, Number]:
        return self.batch_get(self.keys())

    # ------------------------------------------------------------------
    # Batch operations
    # ------------------------------------------------------------------

    def batch_get(self, keys: Iterable[str]) -> dict[str, Number]:
        try:
            return {key: self.get(key) for key in keys}
        except Exception as exc:
            self._report("batch_get", None, exc)
            return {}

    def batch_set(self, items: Iterable[Any]) -> None:
        self._batch("batch_set", self.set, items)

    def batch_add(self, items: Iterable[Any]) -> None:
        self._batch("batch_add", self.add, items)

    def batch_sub(self, items: Iterable[Any]) -> None:
        self._batch("batch_sub", self.sub, items)

    def batch_mul(self, items: Iterable[Any]) -> None:
        self._batch("batch_mul", self.mul, items)

    def batch_div(self, items: Iterable[Any]) -> None:
        self._batch("batch_div", self.div, items)

    def batch_delete(self, keys: Iterable[str]) -> None:
        try:
            for key in keys:
                self.delete(key)
        except Exception as exc:
            self._report("batch_delete", None, exc)

    def __repr__(self) -> str:
        return f"Ledger({self._store!r}, namespace={self._namespace!r})"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def open_ledger(settings: SettingsManager, log: LogFn | None = None) -> Ledger:
    """Build a Ledger from ledger.ini: backend, namespace, reset scope, log level."""
    return Ledger(
        create_store(settings),
        log=log or make_stream_log(settings.log_level),
        namespace=settings.namespace,
        reset_scope=settings.reset_scope,
    )
