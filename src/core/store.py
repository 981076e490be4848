"""Backing stores for the ledger.

A store is a synchronous string → string map with the same primitive set a
browser's localStorage offers, plus ``keys()``:

    get_item(key)          → str | None
    set_item(key, value)
    remove_item(key)
    clear()
    keys()                 → list[str]

Implementations
---------------
MemoryStore     — dict in memory; optional character quota (tests, throwaway sessions)
IniFileStore    — one-section INI file via configparser, rewritten per change
QSettingsStore  — PySide6 QSettings (INI file or native per-user storage)

Every failure of the underlying medium is re-raised as StoreFault.
"""
from __future__ import annotations

from configparser import ConfigParser, Error as ConfigParserError
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from PySide6.QtCore import QSettings

from src.core.constants import INI_SECTION, DEFAULT_DATA_FILE
from src.core.errors import StoreFault

if TYPE_CHECKING:
    from src.core.settings_manager import SettingsManager


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...
    def clear(self) -> None: ...
    def keys(self) -> list[str]: ...


# ---------------------------------------------------------------------------
# MemoryStore
# ---------------------------------------------------------------------------

class MemoryStore:
    """In-memory store.  State is lost with the instance.

    ``quota`` caps the total number of characters (keys + values); a write
    that would exceed it raises StoreFault and leaves the store unchanged.
    """

    def __init__(self, quota: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self._quota = quota

    def get_item(self, key: str) -> str | None:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota is not None:
            held   = len(key) + len(self._data[key]) if key in self._data else 0
            needed = self.usage() - held + len(key) + len(value)
            if needed > self._quota:
                raise StoreFault(f"quota exceeded ({needed} > {self._quota})")
        self._data[key] = value

    def remove_item(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def keys(self) -> list[str]:
        return list(self._data)

    def usage(self) -> int:
        """Characters currently held (keys + values)."""
        return sum(len(k) + len(v) for k, v in self._data.items())

    def __repr__(self) -> str:
        return f"MemoryStore({self._data!r})"


# ---------------------------------------------------------------------------
# IniFileStore
# ---------------------------------------------------------------------------

class IniFileStore:
    """Durable store in a single ``[LEDGER]`` section of an INI file.

    Keys keep their case.  Keys that INI syntax cannot hold (empty, with
    leading or trailing whitespace, containing ``=`` or a line break, or
    starting with ``[``) are refused with StoreFault.  A mutation whose save
    fails is undone in memory before StoreFault propagates.
    """

    def __init__(self, ini_path: Path, section: str = INI_SECTION) -> None:
        self.ini_path = Path(ini_path)
        self.section  = section
        self.config   = ConfigParser(
            delimiters=("=",),
            comment_prefixes=(),
            inline_comment_prefixes=None,
            interpolation=None,
        )
        self.config.optionxform = str   # type: ignore[assignment]
        if self.ini_path.exists():
            try:
                self.config.read(self.ini_path, encoding="utf-8")
            except (OSError, ConfigParserError) as exc:
                raise StoreFault(f"cannot read {self.ini_path}: {exc}") from exc
        if not self.config.has_section(section):
            self.config.add_section(section)

    # ------------------------------------------------------------------
    def get_item(self, key: str) -> str | None:
        return self.config.get(self.section, key, fallback=None)

    def set_item(self, key: str, value: str) -> None:
        if (not key or key != key.strip() or key.startswith("[")
                or any(c in key for c in "=\r\n")):
            raise StoreFault(f"key not representable in INI: {key!r}")
        before = self._items()
        self.config.set(self.section, key, value)
        self._save_or_restore(before)

    def remove_item(self, key: str) -> None:
        before = self._items()
        if self.config.remove_option(self.section, key):
            self._save_or_restore(before)

    def clear(self) -> None:
        before = self._items()
        self.config.remove_section(self.section)
        self.config.add_section(self.section)
        self._save_or_restore(before)

    def keys(self) -> list[str]:
        return list(self.config.options(self.section))

    def save(self) -> None:
        try:
            self.ini_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.ini_path, "w", encoding="utf-8") as f:
                self.config.write(f)
        except OSError as exc:
            raise StoreFault(f"cannot write {self.ini_path}: {exc}") from exc

    # ------------------------------------------------------------------
    def _items(self) -> dict[str, str]:
        return dict(self.config.items(self.section))

    def _save_or_restore(self, before: dict[str, str]) -> None:
        """Save; on failure put the section back to ``before`` and re-raise."""
        try:
            self.save()
        except StoreFault:
            self.config.remove_section(self.section)
            self.config.add_section(self.section)
            for k, v in before.items():
                self.config.set(self.section, k, v)
            raise


# ---------------------------------------------------------------------------
# QSettingsStore
# ---------------------------------------------------------------------------

class QSettingsStore:
    """Durable store on top of QSettings.

    With ``ini_path`` the data lives in that INI file; otherwise QSettings
    picks the platform's native per-user location from ``organization`` and
    ``application``.  Each mutation is followed by ``sync()``; if that fails the
    previous values are put back before StoreFault propagates.
    """

    def __init__(
        self,
        ini_path:     Path | None = None,
        organization: str = "",
        application:  str = "",
    ) -> None:
        if ini_path is not None:
            self._qs = QSettings(str(ini_path), QSettings.Format.IniFormat)
        else:
            self._qs = QSettings(organization, application)
        self._check("open")

    # ------------------------------------------------------------------
    def get_item(self, key: str) -> str | None:
        value = self._qs.value(key)
        if value is None:
            return None
        if isinstance(value, list):
            # QSettings splits comma-separated INI values into a list
            return ",".join(str(v) for v in value)
        return str(value)

    def set_item(self, key: str, value: str) -> None:
        before = self._values([key])
        self._qs.setValue(key, value)
        self._sync("write", key, before)

    def remove_item(self, key: str) -> None:
        before = self._values([key])
        self._qs.remove(key)
        self._sync("remove", key, before)

    def clear(self) -> None:
        before = self._values(self._qs.allKeys())
        self._qs.clear()
        self._sync("clear", "", before)

    def keys(self) -> list[str]:
        return list(self._qs.allKeys())

    @property
    def file_name(self) -> str:
        return self._qs.fileName()

    # ------------------------------------------------------------------
    def _values(self, keys) -> dict[str, object]:
        """Raw values of ``keys``; absent keys map to None."""
        return {k: self._qs.value(k) if self._qs.contains(k) else None for k in keys}

    def _sync(self, action: str, key: str, before: dict[str, object]) -> None:
        """Sync; on failure restore the ``before`` values and raise StoreFault."""
        self._qs.sync()
        try:
            self._check(f"{action} {key!r}" if key else action)
        except StoreFault:
            for k, v in before.items():
                if v is None:
                    self._qs.remove(k)
                else:
                    self._qs.setValue(k, v)
            raise

    def _check(self, action: str) -> None:
        status = self._qs.status()
        if status != QSettings.Status.NoError:
            raise StoreFault(f"QSettings {action} failed: {status.name}")


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_store(settings: "SettingsManager") -> KeyValueStore:
    """Build the backend named by ``[STORAGE] backend``."""
    backend = settings.backend
    if backend == "memory":
        return MemoryStore()
    if backend == "ini":
        return IniFileStore(settings.data_path or Path(DEFAULT_DATA_FILE))
    if backend == "qsettings":
        return QSettingsStore(
            settings.data_path,
            organization=settings.organization,
            application=settings.application,
        )
    raise ValueError(f"Unknown storage backend: {backend!r}")
