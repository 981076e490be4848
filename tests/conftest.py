"""Shared test fixtures."""
import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `src.*` imports work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.core.ledger import Ledger
from src.core.store import MemoryStore


class FixedRandom:
    """Stand-in for random.Random whose random() always returns ``value``."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def logs():
    """List of (level, message) tuples collected by the ``log`` fixture."""
    return []


@pytest.fixture
def log(logs):
    return lambda level, msg: logs.append((level, msg))


@pytest.fixture
def ledger(store, log):
    return Ledger(store, log=log)


@pytest.fixture
def fixed_random():
    """Factory: fixed_random(0.99) → object whose random() returns 0.99."""
    return FixedRandom
