"""Tests for src.core.constants — verify documented values and types."""
from src.core import constants


class TestLedgerConstants:
    def test_default_value(self):
        assert constants.DEFAULT_VALUE == 0

    def test_clamp_floor(self):
        assert constants.CLAMP_FLOOR == 0


class TestStorageConstants:
    def test_default_backend_is_known(self):
        assert constants.DEFAULT_BACKEND in constants.BACKENDS

    def test_default_reset_scope_clears_all(self):
        assert constants.DEFAULT_RESET_SCOPE == "all"
        assert constants.DEFAULT_RESET_SCOPE in constants.RESET_SCOPES

    def test_data_file(self):
        assert constants.DEFAULT_DATA_FILE.endswith(".ini")


class TestLogConstants:
    def test_default_level_is_known(self):
        assert constants.DEFAULT_LOG_LEVEL in constants.LOG_LEVELS

    def test_levels_ordered(self):
        levels = constants.LOG_LEVELS
        assert levels.index("DEBUG") < levels.index("WARNING") < levels.index("ERROR")
