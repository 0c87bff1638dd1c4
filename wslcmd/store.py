"""Read-only access to the per-user Lxss configuration store.

WSL keeps one registry key per distribution under
``HKCU\\Software\\Microsoft\\Windows\\CurrentVersion\\Lxss``. The key name is
the distribution GUID; its values include ``DistributionName``, ``BasePath``
and, for version-2 distributions, ``VhdFileName``. The parent key may hold a
``DefaultVersion`` value.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable, Protocol

from loguru import logger

log = logger

LXSS_KEY = 'Software\\Microsoft\\Windows\\CurrentVersion\\Lxss'
LONG_PATH_PREFIX = '\\\\?\\'


@dataclass(frozen=True)
class LxssEntry:
    guid: str
    name: str
    base_path: str = ''
    vhd_file_name: str = ''


class LxssStore(Protocol):
    def entries(self) -> list[LxssEntry]: ...

    def default_version(self) -> int | None: ...


def strip_long_path_prefix(path: str) -> str:
    if path.startswith(LONG_PATH_PREFIX):
        return path[len(LONG_PATH_PREFIX):]
    return path


def find_entry(entries: Iterable[LxssEntry], name: str) -> LxssEntry | None:
    key = name.casefold()
    for entry in entries:
        if entry.name.casefold() == key:
            return entry
    return None


class RegistryLxssStore:
    """Lxss store backed by the Windows registry."""

    def __init__(self, key_path: str = LXSS_KEY):
        import winreg

        self._winreg = winreg
        self.key_path = key_path

    def _value(self, key, name: str, default=None):
        try:
            return self._winreg.QueryValueEx(key, name)[0]
        except FileNotFoundError:
            return default

    def entries(self) -> list[LxssEntry]:
        winreg = self._winreg
        out: list[LxssEntry] = []
        try:
            root = winreg.OpenKey(winreg.HKEY_CURRENT_USER, self.key_path)
        except FileNotFoundError:
            log.debug('Lxss key not present: {}', self.key_path)
            return out
        with root:
            idx = 0
            while True:
                try:
                    guid = winreg.EnumKey(root, idx)
                except OSError:
                    break
                idx += 1
                with winreg.OpenKey(root, guid) as sub:
                    name = self._value(sub, 'DistributionName', '')
                    if not name:
                        continue
                    out.append(
                        LxssEntry(
                            guid=guid,
                            name=str(name),
                            base_path=str(self._value(sub, 'BasePath', '') or ''),
                            vhd_file_name=str(
                                self._value(sub, 'VhdFileName', '') or ''
                            ),
                        )
                    )
        return out

    def default_version(self) -> int | None:
        winreg = self._winreg
        try:
            with winreg.OpenKey(winreg.HKEY_CURRENT_USER, self.key_path) as root:
                value = self._value(root, 'DefaultVersion')
        except FileNotFoundError:
            return None
        return None if value is None else int(value)


def open_default_store() -> LxssStore | None:
    """Return the registry-backed store on Windows, ``None`` elsewhere."""
    if sys.platform != 'win32':
        return None
    return RegistryLxssStore()
