"""CLI commands for subsystem-wide operations and host checks."""

from __future__ import annotations

import json

import scriptconfig as scfg

from ..distro import get_version, list_online, shutdown
from ..status import (
    probe_tool,
    render_doctor,
    render_online,
    render_version_info,
)
from ._common import _BaseCommand, _session


class ShutdownCLI(_BaseCommand):
    """Terminate all distributions and the WSL 2 virtual machine."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        shutdown(_session(args.config).registry)
        return 0


class VersionCLI(_BaseCommand):
    """Show versions of WSL and its components."""

    as_json = scfg.Value(
        False, isflag=True, alias=['json'], help='Print versions as JSON.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        info = get_version(_session(args.config).registry)
        if args.as_json:
            print(json.dumps(info.as_dict(), indent=2))
        else:
            print(render_version_info(info))
        return 0


class OnlineCLI(_BaseCommand):
    """List distributions available for installation."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        print(render_online(list_online(_session(args.config).registry)))
        return 0


class DoctorCLI(_BaseCommand):
    """Check that wsl.exe can be found and queried."""

    detail = scfg.Value(
        False, isflag=True, help='Include diagnostics for each check.'
    )

    @classmethod
    def main(cls, argv=True, **kwargs):
        args = cls.cli(argv=argv, data=kwargs)
        session = _session(args.config)
        print(render_doctor(session.tool, session.registry, detail=args.detail))
        if probe_tool(session.tool).ok is False:
            return 2
        return 0
