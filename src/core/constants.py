"""Centralised tunables and defaults.

All values that control runtime behaviour are collected here so they are
easy to find, document, and adjust.
"""

# ---------------------------------------------------------------------------
# Ledger  (src/core/ledger.py)
# ---------------------------------------------------------------------------
DEFAULT_VALUE = 0        # what a missing / unreadable entry reads as
CLAMP_FLOOR   = 0        # lower bound for sub / div results

# ---------------------------------------------------------------------------
# Storage  (src/core/store.py, src/core/settings_manager.py)
# ---------------------------------------------------------------------------
BACKENDS            = ("qsettings", "ini", "memory")
DEFAULT_BACKEND     = "qsettings"
DEFAULT_DATA_FILE   = "ledger_data.ini"
DEFAULT_ORGANIZATION = "EcoLedger"
DEFAULT_APPLICATION  = "Economy"
INI_SECTION         = "LEDGER"     # section used by IniFileStore

RESET_SCOPES        = ("all", "namespace")
DEFAULT_RESET_SCOPE = "all"

# ---------------------------------------------------------------------------
# Logging  (src/utils/log.py)
# ---------------------------------------------------------------------------
LOG_LEVELS        = ("DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "WARNING"
