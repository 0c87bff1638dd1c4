"""Decoders for the text output of ``wsl.exe``.

The tool localizes its headings and labels, so decoding is positional
wherever possible:

* ``--list --verbose`` is decoded by dropping the first line and splitting
  the rest on whitespace.
* ``--list --online`` is the exception: its ``NAME`` heading is not
  translated, so it is used to find where the table starts.
* ``--version`` prints one ``label: value`` line per component. Labels are
  localized and cannot be matched, so values are assigned in the order the
  tool prints them. This breaks if upstream ever reorders that block.
"""

from __future__ import annotations

import re
from typing import Iterable

from .errors import OutputFormatError
from .records import (
    VERSION_FIELDS,
    DistributionRecord,
    DistributionState,
    DottedVersion,
    OnlineDistribution,
    VersionInfo,
)

ONLINE_HEADER_TOKEN = 'NAME'

_DOTTED_RE = re.compile(r'^\d+(\.\d+)*$')


def decode_listing(lines: Iterable[str]) -> list[DistributionRecord]:
    """Decode ``wsl.exe --list --verbose`` output into records."""
    rows = [line for line in lines if line.strip()]
    records: list[DistributionRecord] = []
    seen: set[str] = set()
    have_default = False
    for line in rows[1:]:
        fields = line.split()
        is_default = False
        if len(fields) == 4:
            is_default = True
            fields = fields[1:]
        elif len(fields) != 3:
            raise OutputFormatError(
                f'Unexpected distribution listing line: {line!r}'
            )
        name, state_tok, version_tok = fields
        try:
            state = DistributionState.parse(state_tok)
        except ValueError as ex:
            raise OutputFormatError(str(ex)) from ex
        try:
            version = int(version_tok)
        except ValueError as ex:
            raise OutputFormatError(
                f'Unexpected version {version_tok!r} for distribution {name!r}'
            ) from ex
        key = name.casefold()
        if key in seen:
            raise OutputFormatError(f'Duplicate distribution name: {name!r}')
        seen.add(key)
        if is_default:
            if have_default:
                raise OutputFormatError(
                    'More than one distribution is marked as default'
                )
            have_default = True
        records.append(
            DistributionRecord(
                name=name,
                state=state,
                version=version,
                is_default=is_default,
            )
        )
    return records


def decode_online_listing(lines: Iterable[str]) -> list[OnlineDistribution]:
    found_header = False
    out: list[OnlineDistribution] = []
    for line in lines:
        if not found_header:
            parts = line.split()
            found_header = bool(parts) and parts[0] == ONLINE_HEADER_TOKEN
            continue
        text = line.strip()
        if not text:
            continue
        parts = text.split(None, 1)
        friendly = parts[1].strip() if len(parts) > 1 else ''
        out.append(OnlineDistribution(name=parts[0], friendly_name=friendly))
    return out


def parse_dotted_version(text: str) -> DottedVersion:
    value = text.strip()
    if not _DOTTED_RE.match(value):
        raise OutputFormatError(f'Unexpected version value: {text!r}')
    return tuple(int(part) for part in value.split('.'))


def _version_value(line: str) -> str:
    value = line
    if ':' in value:
        value = value.rsplit(':', 1)[1]
    if '-' in value:
        value = value.split('-', 1)[0]
    return value


def decode_version_info(
    lines: Iterable[str], default_distro_version: int | None = None
) -> VersionInfo:
    info = VersionInfo(default_distro_version=default_distro_version)
    values = [line for line in lines if line.strip()]
    for attr, line in zip(VERSION_FIELDS, values):
        setattr(info, attr, parse_dotted_version(_version_value(line)))
    return info
