"""Tests for decoding wsl.exe output."""

from __future__ import annotations

import pytest

from wslcmd.errors import OutputFormatError
from wslcmd.parse import (
    decode_listing,
    decode_online_listing,
    decode_version_info,
    parse_dotted_version,
)
from wslcmd.records import DistributionState

from conftest import LISTING

ONLINE = [
    'The following is a list of valid distributions that can be installed.',
    "Install using 'wsl.exe --install <Distro>'.",
    'NAME                                   FRIENDLY NAME',
    'Ubuntu                                 Ubuntu',
    'Debian                                 Debian GNU/Linux',
    'Ubuntu-22.04                           Ubuntu 22.04 LTS',
    'OracleLinux_9_1                        Oracle Linux 9.1  ',
]

VERSION = [
    'WSL version: 2.0.9.0',
    'Kernel version: 5.15.133.1-1',
    'WSLg version: 1.0.59',
    'MSRDC version: 1.2.4677',
    'Direct3D version: 1.611.1-81528511',
    'DXCore version: 10.0.25131.1002-220531-1700.rs-onecore-base2-hyp',
    'Windows version: 10.0.22621.2715',
]


def test_decode_listing_fields_and_default() -> None:
    recs = decode_listing(LISTING)
    assert [r.name for r in recs] == ['Ubuntu-22.04', 'Debian', 'Alpine']
    assert [r.state for r in recs] == [
        DistributionState.RUNNING,
        DistributionState.STOPPED,
        DistributionState.RUNNING,
    ]
    assert [r.version for r in recs] == [2, 2, 1]
    assert [r.is_default for r in recs] == [True, False, False]
    assert recs[0].filesystem_path == '\\\\wsl$\\Ubuntu-22.04'
    assert recs[0].guid is None and recs[0].disk_image_path is None


def test_decode_listing_header_is_positional() -> None:
    # A localized header must not matter: only its position does.
    lines = [
        '  NOM             ÉTAT            VERSION',
        '  Debian          Stopped         1',
    ]
    recs = decode_listing(lines)
    assert len(recs) == 1
    assert recs[0].is_default is False


def test_decode_listing_counts_lines_and_default_markers() -> None:
    body = [f'  Distro{i}    Stopped    2' for i in range(5)]
    recs = decode_listing(['header', *body])
    assert len(recs) == 5
    assert not any(r.is_default for r in recs)

    body[3] = '* Distro3    Stopped    2'
    recs = decode_listing(['header', *body, ''])
    assert len(recs) == 5
    assert [r.name for r in recs if r.is_default] == ['Distro3']


def test_decode_listing_empty_and_header_only() -> None:
    assert decode_listing([]) == []
    assert decode_listing(['  NAME   STATE   VERSION']) == []


@pytest.mark.parametrize(
    'line',
    [
        '  Debian  Stopped',
        '  Debian  Stopped  2  extra  fields',
        '  Debian  Hibernating  2',
        '  Debian  Stopped  two',
    ],
)
def test_decode_listing_rejects_unexpected_shapes(line: str) -> None:
    with pytest.raises(OutputFormatError):
        decode_listing(['header', line])


def test_decode_listing_rejects_duplicates_and_two_defaults() -> None:
    with pytest.raises(OutputFormatError, match='Duplicate'):
        decode_listing(['h', '  Debian Stopped 2', '  debian Running 1'])
    with pytest.raises(OutputFormatError, match='default'):
        decode_listing(['h', '* Debian Stopped 2', '* Alpine Running 1'])


def test_decode_online_listing() -> None:
    entries = decode_online_listing(ONLINE)
    assert [e.name for e in entries] == [
        'Ubuntu',
        'Debian',
        'Ubuntu-22.04',
        'OracleLinux_9_1',
    ]
    assert entries[1].friendly_name == 'Debian GNU/Linux'
    assert entries[3].friendly_name == 'Oracle Linux 9.1'


def test_decode_online_listing_requires_exact_header() -> None:
    assert decode_online_listing(ONLINE[:2]) == []
    lowered = [line.replace('NAME', 'Name') for line in ONLINE]
    assert decode_online_listing(lowered) == []


def test_decode_version_info() -> None:
    info = decode_version_info(VERSION, default_distro_version=2)
    assert info.wsl == (2, 0, 9, 0)
    assert info.kernel == (5, 15, 133, 1)
    assert info.wslg == (1, 0, 59)
    assert info.msrdc == (1, 2, 4677)
    assert info.direct3d == (1, 611, 1)
    assert info.dxcore == (10, 0, 25131, 1002)
    assert info.windows == (10, 0, 22621, 2715)
    assert info.default_distro_version == 2
    assert info.as_dict()['kernel'] == '5.15.133.1'


def test_decode_version_info_localized_labels_and_short_block() -> None:
    lines = ['Version de WSL : 2.1.5.0', 'Version du noyau : 5.15.146.1-2']
    info = decode_version_info(lines)
    assert info.wsl == (2, 1, 5, 0)
    assert info.kernel == (5, 15, 146, 1)
    assert info.wslg is None
    assert info.windows is None
    assert info.default_distro_version is None


def test_parse_dotted_version_rejects_garbage() -> None:
    assert parse_dotted_version(' 1.2.3 ') == (1, 2, 3)
    with pytest.raises(OutputFormatError):
        parse_dotted_version('unknown')
