"""Probe and rendering logic for distribution listings, versions, and host checks."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Sequence

from .config import ToolConfig
from .errors import WslCmdError
from .records import DistributionRecord, OnlineDistribution, VersionInfo
from .registry import DistributionRegistry
from .util import which


@dataclass(frozen=True)
class ProbeOutcome:
    ok: bool | None
    detail: str
    diag: str = ''


def status_line(ok: bool | None, label: str, detail: str = '') -> str:
    icon = '✅' if ok is True else ('➖' if ok is None else '❌')
    suffix = f' - {detail}' if detail else ''
    return f'{icon} {label}{suffix}'


def clip(text: str, *, max_lines: int = 60) -> str:
    lines = (text or '').strip().splitlines()
    if len(lines) <= max_lines:
        return '\n'.join(lines)
    keep: list[str] = list(lines[:max_lines])
    keep.append(f'... ({len(lines) - max_lines} more lines)')
    return '\n'.join(keep)


def _table(header: Sequence[str], rows: list[Sequence[str]]) -> str:
    widths = [len(h) for h in header]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))
    lines = []
    for row in [header, *rows]:
        cells = [cell.ljust(widths[idx]) for idx, cell in enumerate(row)]
        lines.append('  '.join(cells).rstrip())
    return '\n'.join(lines)


def render_distributions(
    records: Sequence[DistributionRecord], *, detail: bool = False
) -> str:
    if not records:
        return '(no distributions)'
    header = ['', 'NAME', 'STATE', 'VERSION']
    if detail:
        header += ['GUID', 'DISK IMAGE']
    rows: list[Sequence[str]] = []
    for rec in records:
        row = [
            '*' if rec.is_default else '',
            rec.name,
            str(rec.state),
            str(rec.version),
        ]
        if detail:
            row += [
                rec.guid or '-',
                rec.disk_image_path or rec.base_path or '-',
            ]
        rows.append(row)
    return _table(header, rows)


def render_online(entries: Sequence[OnlineDistribution]) -> str:
    if not entries:
        return '(no online distributions reported)'
    return _table(
        ['NAME', 'FRIENDLY NAME'],
        [[e.name, e.friendly_name] for e in entries],
    )


def render_version_info(info: VersionInfo) -> str:
    labels = {
        'wsl': 'WSL',
        'kernel': 'Kernel',
        'wslg': 'WSLg',
        'msrdc': 'MSRDC',
        'direct3d': 'Direct3D',
        'dxcore': 'DXCore',
        'windows': 'Windows',
        'default_distro_version': 'Default distribution version',
    }
    rows = [
        [labels[key], '-' if value is None else str(value)]
        for key, value in info.as_dict().items()
    ]
    return _table(['COMPONENT', 'VERSION'], rows)


def probe_tool(tool: ToolConfig) -> ProbeOutcome:
    exe = tool.exe
    found = os.path.isfile(exe) or which(exe) is not None
    diag = f'encoding={tool.encoding} inside_wsl={tool.inside_wsl}'
    if found:
        return ProbeOutcome(True, exe, diag)
    return ProbeOutcome(False, f'{exe} not found', diag)


def probe_listing(registry: DistributionRegistry) -> ProbeOutcome:
    try:
        records = registry.snapshot()
    except WslCmdError as ex:
        return ProbeOutcome(False, 'listing failed', str(ex))
    default = next((r.name for r in records if r.is_default), '')
    detail = f'{len(records)} installed'
    if default:
        detail += f', default={default}'
    return ProbeOutcome(True, detail)


def probe_store(registry: DistributionRegistry) -> ProbeOutcome:
    if registry.store is None:
        return ProbeOutcome(None, 'not available on this platform')
    try:
        entries = registry.store.entries()
    except OSError as ex:
        return ProbeOutcome(False, 'unreadable', str(ex))
    return ProbeOutcome(True, f'{len(entries)} entries')


def render_doctor(
    tool: ToolConfig, registry: DistributionRegistry, *, detail: bool = False
) -> str:
    probes = [
        ('wsl.exe', probe_tool(tool)),
        ('Distribution listing', probe_listing(registry)),
        ('Configuration store', probe_store(registry)),
    ]
    lines = ['🩺 wslcmd doctor']
    for label, probe in probes:
        lines.append(status_line(probe.ok, label, probe.detail))
        if detail and probe.diag:
            lines.append('    ' + clip(probe.diag).replace('\n', '\n    '))
    return '\n'.join(lines)
