"""User configuration file and the resolved tool configuration."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path

import ubelt as ub

from .util import expand

DEFAULT_TOOL_NAME = 'wsl.exe'


@dataclass
class ToolSettings:
    exe: str = ''
    utf8: bool = False


@dataclass
class WslCmdConfig:
    tool: ToolSettings = field(default_factory=ToolSettings)
    verbosity: int = 1

    def expanded_paths(self) -> 'WslCmdConfig':
        self.tool.exe = expand(self.tool.exe) if self.tool.exe else ''
        return self


@dataclass(frozen=True)
class ToolConfig:
    """How to launch wsl.exe and decode what it prints.

    Built once per process by :func:`wslcmd.detect.detect_tool_config` and
    handed to the invoker, so tests can construct one directly.
    """

    exe: str = DEFAULT_TOOL_NAME
    encoding: str = 'utf-16-le'
    inside_wsl: bool = False
    env_overlay: dict[str, str] = field(default_factory=dict)


def config_path() -> Path:
    root = ub.Path.appdir('wslcmd', type='config').ensuredir()
    return Path(root) / 'config.toml'


def _toml_escape(s: str) -> str:
    return s.replace('\\', '\\\\').replace('"', '\\"')


def _toml_value(v) -> str:
    if isinstance(v, bool):
        return 'true' if v else 'false'
    if isinstance(v, int):
        return str(v)
    return f'"{_toml_escape(str(v))}"'


def dump_toml(cfg: WslCmdConfig) -> str:
    d = asdict(cfg)
    lines: list[str] = []
    # Top-level keys must precede the first table header.
    if d['verbosity'] != 1:
        lines.append(f'verbosity = {d["verbosity"]}')
        lines.append('')
    for section, body in d.items():
        if isinstance(body, dict):
            lines.append(f'[{section}]')
            for k, v in body.items():
                lines.append(f'{k} = {_toml_value(v)}')
            lines.append('')
    return '\n'.join(lines).rstrip() + '\n'


def load(path: Path) -> WslCmdConfig:
    raw = tomllib.loads(path.read_text(encoding='utf-8'))
    cfg = WslCmdConfig()
    body = raw.get('tool')
    if isinstance(body, dict):
        for k, v in body.items():
            if hasattr(cfg.tool, k):
                setattr(cfg.tool, k, v)
    if 'verbosity' in raw:
        cfg.verbosity = int(raw['verbosity'])
    return cfg


def load_or_default(path: Path | None = None) -> WslCmdConfig:
    fpath = path or config_path()
    if not fpath.exists():
        return WslCmdConfig()
    return load(fpath).expanded_paths()


def save(path: Path, cfg: WslCmdConfig) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_toml(cfg), encoding='utf-8')
