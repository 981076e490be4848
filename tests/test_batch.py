"""Tests for src.core.ledger — batch operations."""
from src.core.amount import BatchItem, Range
from src.core.errors import StoreFault
from src.core.ledger import Ledger
from src.core.store import MemoryStore


class SequenceRandom:
    """random() returns the queued values in order."""

    def __init__(self, *values: float) -> None:
        self._values = list(values)

    def random(self) -> float:
        return self._values.pop(0)


class FlakyStore(MemoryStore):
    """Refuses writes to the keys listed in ``deny``."""

    def __init__(self, deny) -> None:
        super().__init__()
        self._deny = set(deny)

    def set_item(self, key, value):
        if key in self._deny:
            raise StoreFault(f"write denied: {key}")
        super().set_item(key, value)

    def remove_item(self, key):
        if key in self._deny:
            raise StoreFault(f"remove denied: {key}")
        super().remove_item(key)


class TestBatchGet:
    def test_missing_reads_zero(self, ledger):
        ledger.set("x", 7)
        assert ledger.batch_get(["x", "y"]) == {"x": 7, "y": 0}

    def test_empty(self, ledger):
        assert ledger.batch_get([]) == {}

    def test_bad_entry_isolated(self, ledger, store):
        store.set_item("bad", "###")
        ledger.set("good", 4)
        assert ledger.batch_get(["bad", "good"]) == {"bad": 0, "good": 4}

    def test_iteration_failure(self, ledger, logs):
        assert ledger.batch_get(None) == {}
        assert logs[-1][1].startswith("batch_get")


class TestBatchSet:
    def test_values_and_ranges(self, ledger):
        ledger.batch_set([BatchItem("a", 3), BatchItem("b", {"min": 1, "max": 1})])
        assert ledger.get("a") == 3
        assert ledger.get("b") == 1

    def test_plain_tuples_and_dicts(self, ledger):
        ledger.batch_set([("a", 1), {"key": "b", "value": 2}])
        assert ledger.batch_get(["a", "b"]) == {"a": 1, "b": 2}

    def test_ranges_drawn_per_item(self, store):
        ledger = Ledger(store, rng=SequenceRandom(0.0, 0.9999))
        ledger.batch_set([("a", Range(1, 10)), ("b", Range(1, 10))])
        assert ledger.get("a") == 1
        assert ledger.get("b") == 10


class TestBatchArithmetic:
    def test_add_applies_sequentially(self, ledger):
        ledger.set("gold", 10)
        ledger.batch_add([("gold", 5), ("gold", 5)])
        assert ledger.get("gold") == 20

    def test_sub_clamps_per_item(self, ledger):
        ledger.set("gold", 3)
        ledger.batch_sub([("gold", 5), ("gold", 1)])
        assert ledger.get("gold") == 0

    def test_mul(self, ledger):
        ledger.batch_set([("a", 2), ("b", 3)])
        ledger.batch_mul([("a", 10), ("b", -1)])
        assert ledger.batch_get(["a", "b"]) == {"a": 20, "b": -3}

    def test_div(self, ledger):
        ledger.batch_set([("a", 10), ("b", 9)])
        ledger.batch_div([("a", 4), ("b", 3)])
        assert ledger.batch_get(["a", "b"]) == {"a": 2.5, "b": 3}

    def test_range_per_item(self, store):
        ledger = Ledger(store, rng=SequenceRandom(0.0, 0.9999))
        ledger.batch_add([("gold", Range(1, 6)), ("gold", Range(1, 6))])
        assert ledger.get("gold") == 7


class TestBatchFaults:
    def test_failing_item_does_not_stop_batch(self, logs):
        ledger = Ledger(FlakyStore(deny={"b"}), log=lambda l, m: logs.append((l, m)))
        ledger.batch_set([("a", 1), ("b", 2), ("c", 3)])
        assert ledger.batch_get(["a", "b", "c"]) == {"a": 1, "b": 0, "c": 3}
        assert any("set 'b'" in m for _, m in logs)

    def test_bad_amount_does_not_stop_batch(self, ledger):
        ledger.batch_add([("a", "x"), ("b", 2)])
        assert ledger.batch_get(["a", "b"]) == {"a": 0, "b": 2}

    def test_malformed_item_aborts_remaining(self, ledger, logs):
        ledger.batch_set([("a", 1), ("broken",), ("c", 3)])
        assert ledger.get("a") == 1
        assert ledger.get("c") == 0
        errors = [m for _, m in logs if m.startswith("batch_set")]
        assert len(errors) == 1

    def test_dict_item_without_value_aborts(self, ledger, logs):
        ledger.batch_add([{"key": "a", "value": 1}, {"key": "b"}, {"key": "c", "value": 1}])
        assert ledger.batch_get(["a", "b", "c"]) == {"a": 1, "b": 0, "c": 0}
        assert logs[-1][1].startswith("batch_add")

    def test_non_iterable(self, ledger, logs):
        ledger.batch_mul(42)
        assert logs[-1][1].startswith("batch_mul")


class TestBatchDelete:
    def test_deletes_in_order(self, ledger):
        ledger.batch_set([("a", 1), ("b", 2), ("c", 3)])
        ledger.batch_delete(["a", "c"])
        assert ledger.batch_get(["a", "b", "c"]) == {"a": 0, "b": 2, "c": 0}

    def test_failing_key_does_not_stop_batch(self, logs):
        store = FlakyStore(deny={"b"})
        store._data.update({"a": "1", "b": "2", "c": "3"})
        ledger = Ledger(store, log=lambda l, m: logs.append((l, m)))
        ledger.batch_delete(["a", "b", "c"])
        assert store.keys() == ["b"]
        assert any("delete 'b'" in m for _, m in logs)

    def test_iteration_failure(self, ledger, logs):
        ledger.batch_delete(None)
        assert logs[-1][1].startswith("batch_delete")
