"""Process launching and small path helpers shared across wslcmd."""

from __future__ import annotations

import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from loguru import logger

from .errors import ExternalToolFailure, ToolNotFoundError

log = logger


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str

    def lines(self) -> list[str]:
        """Non-empty stdout lines with stray BOM/NUL characters removed."""
        out: list[str] = []
        for raw in (self.stdout or '').splitlines():
            line = raw.replace('\ufeff', '').replace('\x00', '').rstrip()
            if line.strip():
                out.append(line)
        return out


def shell_join(cmd: Sequence[str]) -> str:
    return ' '.join(shlex.quote(c) for c in cmd)


def run_cmd(
    cmd: Sequence[str],
    *,
    check: bool = True,
    capture: bool = True,
    encoding: Optional[str] = None,
    env: Optional[dict[str, str]] = None,
) -> CmdResult:
    cmdline = shell_join(cmd)
    log.opt(depth=1).debug('Launching: {}', cmdline)
    try:
        p = subprocess.run(
            list(cmd),
            capture_output=capture,
            text=True,
            encoding=encoding,
            errors='replace',
            env=env,
        )
    except FileNotFoundError as ex:
        raise ToolNotFoundError(f'Executable not found: {cmd[0]}') from ex
    res = CmdResult(p.returncode, p.stdout or '', p.stderr or '')
    if check and p.returncode != 0:
        log.opt(depth=1).error(
            'Exit status {} from {} stderr={} stdout={}',
            p.returncode,
            cmdline,
            res.stderr.strip(),
            res.stdout.strip(),
        )
        raise ExternalToolFailure(
            cmdline, p.returncode, res.lines() or res.stderr.splitlines()
        )
    log.opt(depth=1).debug('Exit status {} from {}', p.returncode, cmdline)
    return res


def which(cmd: str) -> Optional[str]:
    return shutil.which(cmd)


def expand(path: str) -> str:
    return os.path.expandvars(os.path.expanduser(path))


def expand_path(path: str | Path) -> Path:
    return Path(expand(str(path)))
