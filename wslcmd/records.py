"""Record types for distributions, version reports, and batch operation results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

FILESYSTEM_PREFIX = '\\\\wsl$\\'


class DistributionState(enum.Enum):
    STOPPED = 'Stopped'
    RUNNING = 'Running'
    INSTALLING = 'Installing'
    UNINSTALLING = 'Uninstalling'
    CONVERTING = 'Converting'

    @classmethod
    def parse(cls, token: str) -> 'DistributionState':
        """Map a wsl.exe state token (or a user-supplied name) to a state.

        Matching is case-insensitive. Unknown tokens raise ``ValueError``
        instead of silently defaulting.
        """
        text = (token or '').strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise ValueError(f'Unknown distribution state: {token!r}')

    def __str__(self) -> str:
        return self.value


class ExportFormat(enum.Enum):
    AUTO = 'auto'
    TAR = 'tar'
    VHD = 'vhd'

    @classmethod
    def parse(cls, text: 'str | ExportFormat | None') -> 'ExportFormat':
        if isinstance(text, ExportFormat):
            return text
        key = (text or 'auto').strip().lower()
        if key == 'vhdx':
            key = 'vhd'
        for member in cls:
            if member.value == key:
                return member
        allowed = ', '.join(m.value for m in cls)
        raise ValueError(f'--format must be one of: {allowed}')


@dataclass(frozen=True)
class DistributionRecord:
    name: str
    state: DistributionState
    version: int
    is_default: bool = False
    guid: str | None = None
    base_path: str | None = None
    disk_image_path: str | None = None

    @property
    def filesystem_path(self) -> str:
        return FILESYSTEM_PREFIX + self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class OnlineDistribution:
    name: str
    friendly_name: str


DottedVersion = tuple[int, ...]

VERSION_FIELDS = (
    'wsl',
    'kernel',
    'wslg',
    'msrdc',
    'direct3d',
    'dxcore',
    'windows',
)


@dataclass
class VersionInfo:
    wsl: DottedVersion | None = None
    kernel: DottedVersion | None = None
    wslg: DottedVersion | None = None
    msrdc: DottedVersion | None = None
    direct3d: DottedVersion | None = None
    dxcore: DottedVersion | None = None
    windows: DottedVersion | None = None
    default_distro_version: int | None = None

    def as_dict(self) -> dict[str, str | int | None]:
        out: dict[str, str | int | None] = {}
        for name in VERSION_FIELDS:
            out[name] = format_version(getattr(self, name))
        out['default_distro_version'] = self.default_distro_version
        return out


def format_version(value: DottedVersion | None) -> str | None:
    if value is None:
        return None
    return '.'.join(str(part) for part in value)


@dataclass
class BatchResult:
    changed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    records: list[DistributionRecord] = field(default_factory=list)

    def as_dict(self) -> dict[str, list[str]]:
        return {
            'changed': list(self.changed),
            'skipped': list(self.skipped),
            'records': [r.name for r in self.records],
        }
