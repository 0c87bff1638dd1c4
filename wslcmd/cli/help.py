"""CLI help and command-tree rendering utilities."""

from __future__ import annotations

import inspect
from typing import Iterator

import scriptconfig as scfg

from ._common import _BaseCommand


class HelpTreeCLI(_BaseCommand):
    """Print the expanded wslcmd command tree."""

    @classmethod
    def main(cls, argv=True, **kwargs):
        cls.cli(argv=argv, data=kwargs)
        from .main import WslModalCLI

        print(_render_command_tree(WslModalCLI))
        return 0


class HelpModalCLI(scfg.ModalCLI):
    """Help and discovery commands."""

    tree = HelpTreeCLI


def _subcommands(modal_cls: type[scfg.ModalCLI]) -> list[tuple[str, type]]:
    """Declared sub-commands, with the keyword-avoiding ``_`` suffix removed."""
    found: list[tuple[str, type]] = []
    for attr, val in vars(modal_cls).items():
        if attr.startswith('_') or not isinstance(val, type):
            continue
        if issubclass(val, (scfg.ModalCLI, scfg.DataConfig)):
            found.append((attr.rstrip('_'), val))
    return found


def _summary(cls: type) -> str:
    return (inspect.getdoc(cls) or '').partition('\n')[0].strip()


def _tree_lines(
    modal_cls: type[scfg.ModalCLI], path: str, indent: str
) -> Iterator[str]:
    members = _subcommands(modal_cls)
    for idx, (name, sub) in enumerate(members):
        last = idx == len(members) - 1
        cmd = f'{path} {name}'
        summary = _summary(sub)
        label = f'{cmd} - {summary}' if summary else cmd
        yield indent + ('└── ' if last else '├── ') + label
        if issubclass(sub, scfg.ModalCLI):
            child_indent = indent + ('    ' if last else '│   ')
            yield from _tree_lines(sub, cmd, child_indent)


def _render_command_tree(
    modal_cls: type[scfg.ModalCLI], prefix: str = 'wslcmd'
) -> str:
    summary = _summary(modal_cls)
    head = f'{prefix} - {summary}' if summary else prefix
    return '\n'.join([head, *_tree_lines(modal_cls, prefix, '')])
