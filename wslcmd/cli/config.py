"""CLI commands for writing and inspecting the wslcmd config file."""

from __future__ import annotations

import sys

import scriptconfig as scfg

from ..config import (
    ToolSettings,
    WslCmdConfig,
    dump_toml,
    load_or_default,
    save,
)
from ..detect import detect_tool_config
from ._common import _BaseCommand, _cfg_path


class ConfigInitCLI(_BaseCommand):
    """Write a config file with the given tool settings."""

    exe = scfg.Value('', help='Path to wsl.exe (empty: detect it).')
    utf8 = scfg.Value(
        False, isflag=True, help='Ask wsl.exe for UTF-8 output.'
    )
    verbosity = scfg.Value(
        1, help='Default verbosity (0 warnings, 1 info, 2 debug).'
    )
    force = scfg.Value(
        False, isflag=True, help='Overwrite an existing config file.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        path = _cfg_path(args.config)
        if path.exists() and not args.force:
            print(f'Config already exists: {path}', file=sys.stderr)
            print('Use --force to overwrite it.', file=sys.stderr)
            return 2
        cfg = WslCmdConfig(
            tool=ToolSettings(exe=str(args.exe or ''), utf8=bool(args.utf8)),
            verbosity=int(args.verbosity),
        )
        save(path, cfg)
        print(f'Wrote config: {path}')
        return 0


class ConfigShowCLI(_BaseCommand):
    """Show the config file and the wsl.exe settings resolved from it."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        path = _cfg_path(args.config)
        cfg = load_or_default(path)
        tool = detect_tool_config(cfg.tool)
        state = 'exists' if path.exists() else 'not written, showing defaults'
        print(f'# Config: {path} ({state})')
        print(f'# Resolved exe: {tool.exe}')
        print(f'# Output encoding: {tool.encoding}')
        print(dump_toml(cfg), end='')
        return 0


class ConfigModalCLI(scfg.ModalCLI):
    """Config file management commands."""

    init = ConfigInitCLI
    show = ConfigShowCLI
