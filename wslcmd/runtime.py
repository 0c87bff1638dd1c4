"""Runtime helpers for constructing wsl.exe command arguments."""

from __future__ import annotations

from typing import Sequence

SHELL_TYPES = ('standard', 'login', 'none')
SHELL_EXECUTABLE = '/bin/sh'


def list_args() -> list[str]:
    return ['--list', '--verbose']


def list_online_args() -> list[str]:
    return ['--list', '--online']


def terminate_args(name: str) -> list[str]:
    return ['--terminate', name]


def set_version_args(name: str, version: int) -> list[str]:
    return ['--set-version', name, str(int(version))]


def set_default_args(name: str) -> list[str]:
    return ['--set-default', name]


def unregister_args(name: str) -> list[str]:
    return ['--unregister', name]


def export_args(name: str, path: str, *, vhd: bool = False) -> list[str]:
    args = ['--export', name, path]
    if vhd:
        args.append('--vhd')
    return args


def import_args(
    name: str,
    destination: str,
    source: str,
    *,
    version: int | None = None,
    vhd: bool = False,
) -> list[str]:
    args = ['--import', name, destination, source]
    if version is not None:
        args.extend(['--version', str(int(version))])
    if vhd:
        args.append('--vhd')
    return args


def import_in_place_args(name: str, source: str) -> list[str]:
    return ['--import-in-place', name, source]


def shutdown_args() -> list[str]:
    return ['--shutdown']


def version_args() -> list[str]:
    return ['--version']


def session_args(
    name: str,
    *,
    user: str = '',
    working_dir: str = '',
    shell_type: str = '',
    system: bool = False,
) -> list[str]:
    """Options selecting the distribution and session for run/enter calls.

    ``--system`` targets the system distribution, so ``name`` is not passed
    along with it.
    """
    args = ['--system'] if system else ['--distribution', name]
    if user:
        args.extend(['--user', user])
    if working_dir:
        args.extend(['--cd', working_dir])
    if shell_type:
        kind = shell_type.strip().lower()
        if kind not in SHELL_TYPES:
            raise ValueError(
                f'shell type must be one of: {", ".join(SHELL_TYPES)}'
            )
        args.extend(['--shell-type', kind])
    return args


def run_command_args(
    name: str,
    command: Sequence[str] | str,
    *,
    user: str = '',
    working_dir: str = '',
    shell_type: str = '',
    system: bool = False,
) -> list[str]:
    """Arguments to run ``command`` inside a distribution.

    A sequence is passed after ``--`` and executed as-is. A string is run
    with ``/bin/sh -c`` through ``--exec``, so pipes, globs and variables are
    interpreted inside the distribution and the string is never read as a
    wsl.exe option.
    """
    args = session_args(
        name,
        user=user,
        working_dir=working_dir,
        shell_type=shell_type,
        system=system,
    )
    if isinstance(command, str):
        if not command.strip():
            raise ValueError('command must not be empty')
        args.extend(['--exec', SHELL_EXECUTABLE, '-c', command])
    else:
        if not command:
            raise ValueError('command must not be empty')
        args.extend(['--', *command])
    return args
