from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

import scriptconfig as scfg
from loguru import logger

from ..config import ToolConfig, WslCmdConfig, config_path, load_or_default
from ..detect import detect_tool_config
from ..invoker import ProcessInvoker
from ..records import DistributionRecord
from ..registry import DistributionRegistry
from ..status import render_distributions
from ..store import open_default_store

log = logger


class _BaseCommand(scfg.DataConfig):
    """Base options shared by all commands."""

    config = scfg.Value(
        None, help='Path to config TOML (default: per-user config dir).'
    )
    verbose = scfg.Value(
        0,
        short_alias=['v'],
        isflag='counter',
        help='Increase verbosity (-v, -vv).',
    )


@dataclass
class Session:
    cfg: WslCmdConfig
    tool: ToolConfig
    registry: DistributionRegistry


def _cfg_path(p: str | None) -> Path:
    return Path(p).expanduser().resolve() if p else config_path()


def _load_cfg(config_path_opt: str | None) -> WslCmdConfig:
    path = _cfg_path(config_path_opt)
    if config_path_opt and not path.exists():
        raise FileNotFoundError(f'Config not found: {path}')
    return load_or_default(path)


def _session(config_path_opt: str | None) -> Session:
    cfg = _load_cfg(config_path_opt)
    tool = detect_tool_config(cfg.tool)
    registry = DistributionRegistry(ProcessInvoker(tool), open_default_store())
    return Session(cfg=cfg, tool=tool, registry=registry)


def _parse_names_arg(value) -> list[str]:
    """Accept a list of names or a comma/space separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.replace(',', ' ').split()
    else:
        items = []
        for item in value:
            items.extend(str(item).replace(',', ' ').split())
    return [item for item in items if item]


def _parse_paths_arg(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value.strip() else []
    return [str(item) for item in value if str(item).strip()]


def _parse_command_arg(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return shlex.split(value)
    return [str(item) for item in value]


def _optional_int(value) -> int | None:
    if value is None or value == '':
        return None
    return int(value)


def _print_records(records: list[DistributionRecord]) -> None:
    if records:
        print(render_distributions(records))


__all__ = [name for name in globals() if not name.startswith('__')]
