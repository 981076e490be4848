"""Settings manager — reads/writes ledger.ini via configparser."""
from configparser import ConfigParser
from pathlib import Path

from src.core.constants import (
    BACKENDS, DEFAULT_BACKEND, DEFAULT_DATA_FILE,
    DEFAULT_ORGANIZATION, DEFAULT_APPLICATION,
    RESET_SCOPES, DEFAULT_RESET_SCOPE,
    LOG_LEVELS, DEFAULT_LOG_LEVEL,
)


class SettingsManager:
    def __init__(self, ini_path: Path) -> None:
        self.ini_path = ini_path
        self.config = ConfigParser(comment_prefixes=("#", ";"), inline_comment_prefixes=("#",))
        if ini_path.exists():
            self.config.read(ini_path, encoding="utf-8")

    # ------------------------------------------------------------------
    # Generic getters
    # ------------------------------------------------------------------
    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self.config.get(section, key, fallback=fallback)

    def set(self, section: str, key: str, value: str) -> None:
        if not self.config.has_section(section):
            self.config.add_section(section)
        self.config.set(section, key, value)
        self.save()

    def save(self) -> None:
        with open(self.ini_path, "w", encoding="utf-8") as f:
            self.config.write(f)

    # ------------------------------------------------------------------
    # Convenience properties
    # ------------------------------------------------------------------
    @property
    def backend(self) -> str:
        value = self.get("STORAGE", "backend", DEFAULT_BACKEND).strip().lower()
        if value not in BACKENDS:
            raise ValueError(f"[STORAGE] backend must be one of {BACKENDS}, got {value!r}")
        return value

    @property
    def data_path(self) -> Path | None:
        """Data file for the ini / qsettings backends; None when left empty.

        Relative paths are resolved against the directory of ledger.ini.
        """
        raw = self.get("STORAGE", "path", DEFAULT_DATA_FILE).strip()
        if not raw:
            return None
        p = Path(raw)
        return p if p.is_absolute() else self.ini_path.parent / p

    @property
    def organization(self) -> str:
        return self.get("STORAGE", "organization", DEFAULT_ORGANIZATION)

    @property
    def application(self) -> str:
        return self.get("STORAGE", "application", DEFAULT_APPLICATION)

    @property
    def namespace(self) -> str:
        return self.get("LEDGER", "namespace", "").strip()

    @property
    def reset_scope(self) -> str:
        value = self.get("LEDGER", "reset_scope", DEFAULT_RESET_SCOPE).strip().lower()
        if value not in RESET_SCOPES:
            raise ValueError(f"[LEDGER] reset_scope must be one of {RESET_SCOPES}, got {value!r}")
        return value

    @property
    def log_level(self) -> str:
        value = self.get("LOG", "level", DEFAULT_LOG_LEVEL).strip().upper()
        return value if value in LOG_LEVELS else DEFAULT_LOG_LEVEL
