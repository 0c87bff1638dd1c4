"""CLI commands for running commands in and entering distributions."""

from __future__ import annotations

import sys

import scriptconfig as scfg

from ..distro import enter_distribution, invoke_command
from ..errors import ExternalToolFailure
from ._common import _BaseCommand, _parse_command_arg, _parse_names_arg, _session


class InvokeCLI(_BaseCommand):
    """Run a command inside one or more distributions.

    By default the words after ``--`` are joined and run with ``/bin/sh -c``
    inside the distribution. With ``--raw`` they are executed as-is.
    """

    command = scfg.Value(
        [], nargs='*', position=1, help='Command to run (put it after --).'
    )
    distribution = scfg.Value(
        '',
        short_alias=['d'],
        help='Name patterns of target distributions (default distribution if empty).',
    )
    user = scfg.Value('', short_alias=['u'], help='User to run the command as.')
    cd = scfg.Value('', help='Working directory inside the distribution.')
    shell_type = scfg.Value('', help='One of: standard, login, none.')
    system = scfg.Value(
        False, isflag=True, help='Run in the system distribution.'
    )
    raw = scfg.Value(
        False, isflag=True, help='Execute the command without a shell.'
    )
    capture = scfg.Value(
        False,
        isflag=True,
        help='Capture output and print it after the command finishes.',
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        words = _parse_command_arg(args.command)
        if not words:
            raise RuntimeError('No command given. Usage: wslcmd invoke -- CMD')
        command = words if args.raw else ' '.join(words)
        session = _session(args.config)
        try:
            lines = invoke_command(
                session.registry,
                command,
                names=_parse_names_arg(args.distribution) or None,
                user=str(args.user or ''),
                working_dir=str(args.cd or ''),
                shell_type=str(args.shell_type or ''),
                system=bool(args.system),
                capture=bool(args.capture),
            )
        except ExternalToolFailure as ex:
            for line in ex.output:
                print(line)
            print(f'ERROR: command exited with code {ex.code}', file=sys.stderr)
            return ex.code or 1
        for line in lines:
            print(line)
        return 0


class EnterCLI(_BaseCommand):
    """Start an interactive shell in a distribution."""

    name = scfg.Value(
        '', position=1, help='Distribution to enter (default distribution if empty).'
    )
    user = scfg.Value('', short_alias=['u'], help='User to log in as.')
    cd = scfg.Value('', help='Initial working directory.')
    shell_type = scfg.Value('', help='One of: standard, login, none.')
    system = scfg.Value(
        False, isflag=True, help='Enter the system distribution.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        return enter_distribution(
            session.registry,
            name=str(args.name or '').strip(),
            user=str(args.user or ''),
            working_dir=str(args.cd or ''),
            shell_type=str(args.shell_type or ''),
            system=bool(args.system),
        )
