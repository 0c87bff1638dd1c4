"""CLI commands for listing, stopping, converting, removing, and transferring distributions."""

from __future__ import annotations

import json
import sys

import scriptconfig as scfg

from ..distro import (
    export_distribution,
    import_distribution,
    list_distributions,
    remove_distributions,
    set_distribution,
    stop_distributions,
)
from ..records import DistributionState, ExportFormat
from ..status import render_distributions
from ._common import (
    _BaseCommand,
    _optional_int,
    _parse_names_arg,
    _parse_paths_arg,
    _print_records,
    _session,
    log,
)


class ListCLI(_BaseCommand):
    """List installed distributions, optionally filtered."""

    name = scfg.Value(
        [],
        nargs='*',
        position=1,
        help='Name patterns (case-insensitive globs) to match.',
    )
    default_only = scfg.Value(
        False, isflag=True, help='Only show the default distribution.'
    )
    state = scfg.Value(
        '',
        help='Only show distributions in this state (e.g. Running, Stopped).',
    )
    version = scfg.Value(None, help='Only show distributions of this WSL version.')
    detail = scfg.Value(
        False,
        isflag=True,
        help='Include GUID and disk image columns from the configuration store.',
    )
    as_json = scfg.Value(
        False, isflag=True, alias=['json'], help='Print records as JSON.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        state = DistributionState.parse(args.state) if args.state else None
        records = list_distributions(
            session.registry,
            _parse_names_arg(args.name),
            default=bool(args.default_only),
            state=state,
            version=_optional_int(args.version),
        )
        if args.as_json:
            print(
                json.dumps(
                    [
                        {
                            'name': r.name,
                            'state': str(r.state),
                            'version': r.version,
                            'default': r.is_default,
                            'guid': r.guid,
                            'base_path': r.base_path,
                            'disk_image_path': r.disk_image_path,
                            'filesystem_path': r.filesystem_path,
                        }
                        for r in records
                    ],
                    indent=2,
                )
            )
            return 0
        print(render_distributions(records, detail=bool(args.detail)))
        return 0


class StopCLI(_BaseCommand):
    """Terminate running distributions."""

    name = scfg.Value(
        [], nargs='*', position=1, help='Name patterns of distributions to stop.'
    )
    passthru = scfg.Value(
        False, isflag=True, help='Print the distributions afterwards.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        result = stop_distributions(
            session.registry,
            names=_parse_names_arg(args.name),
            pass_through=bool(args.passthru),
        )
        log.debug('stop result: {}', result.as_dict())
        _print_records(result.records)
        return 0


class SetCLI(_BaseCommand):
    """Convert distributions between WSL versions or set the default."""

    name = scfg.Value(
        [], nargs='*', position=1, help='Name patterns of distributions to change.'
    )
    version = scfg.Value(None, help='Target WSL version (1 or 2).')
    make_default = scfg.Value(
        False, isflag=True, help='Make the distribution the default.'
    )
    passthru = scfg.Value(
        False, isflag=True, help='Print the distributions afterwards.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        result = set_distribution(
            session.registry,
            names=_parse_names_arg(args.name),
            version=_optional_int(args.version),
            default=bool(args.make_default),
            pass_through=bool(args.passthru),
        )
        log.debug('set result: {}', result.as_dict())
        _print_records(result.records)
        return 0


class RemoveCLI(_BaseCommand):
    """Unregister distributions and delete their file systems."""

    name = scfg.Value(
        [], nargs='*', position=1, help='Name patterns of distributions to remove.'
    )
    yes = scfg.Value(
        False, isflag=True, help='Do not ask for confirmation.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        names = _parse_names_arg(args.name)
        if not args.yes:
            _confirm_removal(names)
        result = remove_distributions(session.registry, names=names)
        for name in result.changed:
            print(f'Removed {name}')
        return 0


class ExportCLI(_BaseCommand):
    """Export distributions to a tar archive or VHDX image."""

    name = scfg.Value(
        [], nargs='*', position=1, help='Name patterns of distributions to export.'
    )
    destination = scfg.Value(
        '.', help='Target file, or an existing directory for <name>.<ext>.'
    )
    format = scfg.Value(
        'auto', help='One of: auto, tar, vhd (auto uses the file extension).'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        paths = export_distribution(
            session.registry,
            args.destination,
            names=_parse_names_arg(args.name),
            fmt=ExportFormat.parse(args.format),
        )
        for path in paths:
            print(str(path))
        return 0


class ImportCLI(_BaseCommand):
    """Register distributions from tar archives or VHDX images."""

    path = scfg.Value(
        [], nargs='*', position=1, help='Source files (glob patterns allowed).'
    )
    destination = scfg.Value(
        '', help='Directory to install into (a <name> subdirectory is created).'
    )
    name = scfg.Value('', help='Distribution name (single source only).')
    version = scfg.Value(None, help='WSL version to register with (1 or 2).')
    raw_destination = scfg.Value(
        False,
        isflag=True,
        help='Install directly into --destination without a <name> subdirectory.',
    )
    format = scfg.Value('auto', help='One of: auto, tar, vhd.')
    in_place = scfg.Value(
        False,
        isflag=True,
        help='Register a VHDX where it is instead of copying it.',
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        sources = _parse_paths_arg(args.path)
        if not sources:
            raise RuntimeError('At least one source file is required.')
        records = import_distribution(
            session.registry,
            sources,
            args.destination or None,
            name=str(args.name or '').strip(),
            version=_optional_int(args.version),
            raw_destination=bool(args.raw_destination),
            fmt=ExportFormat.parse(args.format),
            in_place=bool(args.in_place),
        )
        _print_records(records)
        return 0


def _confirm_removal(names: list[str]) -> None:
    if not sys.stdin.isatty():
        raise RuntimeError(
            'Removing distributions requires confirmation, but stdin is not '
            'interactive. Re-run with --yes.'
        )
    print('About to unregister (and delete the file systems of):')
    print(f'  {", ".join(names) or "(nothing)"}')
    ans = input('Continue? [y/N]: ').strip().lower()
    if ans not in {'y', 'yes'}:
        raise RuntimeError('Aborted by user.')
