from __future__ import annotations

import pytest

from wslcmd.distro import (
    default_import_name,
    export_distribution,
    import_distribution,
    resolve_export_target,
)
from wslcmd.distro.transfer import resolve_sources
from wslcmd.errors import DestinationExistsError
from wslcmd.records import ExportFormat


def test_resolve_export_target(tmp_path) -> None:
    path, vhd = resolve_export_target(tmp_path, ExportFormat.AUTO, name='Ubuntu')
    assert path == tmp_path / 'Ubuntu.tar.gz'
    assert vhd is False

    path, vhd = resolve_export_target(tmp_path, 'vhd', name='Ubuntu')
    assert path == tmp_path / 'Ubuntu.vhdx'
    assert vhd is True

    path, vhd = resolve_export_target(tmp_path / 'x.vhdx', 'auto')
    assert path == tmp_path / 'x.vhdx'
    assert vhd is True

    path, vhd = resolve_export_target(tmp_path / 'x.vhdx', 'tar')
    assert vhd is False

    path, vhd = resolve_export_target(tmp_path / 'x.tar', 'auto')
    assert vhd is False


def test_export_into_directory(registry, invoker, tmp_path) -> None:
    paths = export_distribution(registry, tmp_path, names=['*'])
    assert paths == [
        tmp_path / 'Ubuntu-22.04.tar.gz',
        tmp_path / 'Debian.tar.gz',
        tmp_path / 'Alpine.tar.gz',
    ]
    assert invoker.actions()[0] == [
        '--export',
        'Ubuntu-22.04',
        str(tmp_path / 'Ubuntu-22.04.tar.gz'),
    ]


def test_export_vhd_file(registry, invoker, tmp_path) -> None:
    dest = tmp_path / 'debian.vhdx'
    export_distribution(registry, dest, names=['Debian'])
    assert invoker.actions() == [['--export', 'Debian', str(dest), '--vhd']]


def test_export_refuses_existing_destination(registry, invoker, tmp_path) -> None:
    (tmp_path / 'Alpine.tar.gz').write_text('old')
    with pytest.raises(DestinationExistsError):
        export_distribution(registry, tmp_path, names=['*'])
    # Nothing is exported when any destination is taken.
    assert invoker.actions() == []


def test_export_several_needs_directory(registry, invoker, tmp_path) -> None:
    with pytest.raises(ValueError, match='directory'):
        export_distribution(registry, tmp_path / 'all.tar', names=['*'])
    assert invoker.actions() == []


@pytest.mark.parametrize(
    'source, expected',
    [
        ('Ubuntu.tar.gz', 'Ubuntu'),
        ('C:/backups/Debian.TAR', 'Debian'),
        ('alpine.tgz', 'alpine'),
        ('images/arch.vhdx', 'arch'),
        ('plain', 'plain'),
    ],
)
def test_default_import_name(source, expected) -> None:
    assert default_import_name(source) == expected


def test_resolve_sources(tmp_path) -> None:
    (tmp_path / 'a.tar').write_text('a')
    (tmp_path / 'b.tar').write_text('b')
    (tmp_path / 'c.vhdx').write_text('c')
    assert resolve_sources([str(tmp_path / '*.tar')]) == [
        tmp_path / 'a.tar',
        tmp_path / 'b.tar',
    ]
    assert resolve_sources([tmp_path / 'c.vhdx']) == [tmp_path / 'c.vhdx']
    with pytest.raises(FileNotFoundError):
        resolve_sources([str(tmp_path / '*.tgz')])
    with pytest.raises(FileNotFoundError):
        resolve_sources([tmp_path / 'missing.tar'])


def test_import_into_named_subdirectory(registry, invoker, tmp_path) -> None:
    src = tmp_path / 'Debian.tar.gz'
    src.write_text('x')
    dest = tmp_path / 'wsl'
    records = import_distribution(registry, [src], dest, version=2)
    assert invoker.actions() == [
        [
            '--import',
            'Debian',
            str(dest / 'Debian'),
            str(src),
            '--version',
            '2',
        ]
    ]
    assert [r.name for r in records] == ['Debian']


def test_import_vhd_raw_destination(registry, invoker, tmp_path) -> None:
    src = tmp_path / 'image.vhdx'
    src.write_text('x')
    dest = tmp_path / 'target'
    import_distribution(
        registry, [src], dest, name='Alpine', raw_destination=True
    )
    assert invoker.actions() == [
        ['--import', 'Alpine', str(dest), str(src), '--vhd']
    ]


def test_import_in_place(registry, invoker, tmp_path) -> None:
    src = tmp_path / 'Alpine.vhdx'
    src.write_text('x')
    records = import_distribution(registry, [src], in_place=True)
    assert invoker.actions() == [['--import-in-place', 'Alpine', str(src)]]
    assert [r.name for r in records] == ['Alpine']


def test_import_argument_checks(registry, invoker, tmp_path) -> None:
    (tmp_path / 'a.tar').write_text('a')
    (tmp_path / 'b.tar').write_text('b')
    with pytest.raises(ValueError, match='one file'):
        import_distribution(
            registry, [str(tmp_path / '*.tar')], tmp_path, name='Same'
        )
    with pytest.raises(ValueError, match='destination'):
        import_distribution(registry, [tmp_path / 'a.tar'])
    with pytest.raises(ValueError, match='Unsupported'):
        import_distribution(registry, [tmp_path / 'a.tar'], tmp_path, version=3)
    assert invoker.actions() == []
