"""Launch wsl.exe with a resolved tool configuration and decode its output."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from loguru import logger

from .config import ToolConfig
from .errors import ExternalToolFailure
from .util import run_cmd, shell_join

log = logger


class ProcessInvoker:
    """Runs wsl.exe one call at a time.

    Encoding overrides travel in the child's ``env`` argument only; the
    environment of this process is left untouched.
    """

    def __init__(self, config: ToolConfig):
        self.config = config

    def argv(self, args: Sequence[str]) -> list[str]:
        return [self.config.exe, *args]

    def _child_env(self) -> Optional[dict[str, str]]:
        if not self.config.env_overlay:
            return None
        env = dict(os.environ)
        env.update(self.config.env_overlay)
        return env

    def invoke(
        self,
        args: Sequence[str],
        *,
        ignore_errors: bool = False,
        encoding: Optional[str] = None,
    ) -> list[str]:
        """Run wsl.exe with ``args`` and return its non-empty stdout lines.

        Args:
            args: arguments after the executable.
            ignore_errors: return an empty list instead of raising when the
                tool exits with a non-zero status.
            encoding: override the decoding of stdout. Output produced by a
                program inside a distribution is UTF-8 regardless of what
                wsl.exe itself writes.
        """
        cmd = self.argv(args)
        res = run_cmd(
            cmd,
            check=False,
            capture=True,
            encoding=encoding or self.config.encoding,
            env=self._child_env(),
        )
        lines = res.lines()
        if res.code != 0:
            if ignore_errors:
                log.debug(
                    'Ignoring failure code={} cmd={}', res.code, shell_join(cmd)
                )
                return []
            log.error(
                'wsl.exe failed code={} cmd={} output={}',
                res.code,
                shell_join(cmd),
                ' | '.join(lines) or res.stderr.strip(),
            )
            raise ExternalToolFailure(
                shell_join(cmd), res.code, lines or res.stderr.splitlines()
            )
        return lines

    def run_attached(self, args: Sequence[str]) -> int:
        """Run wsl.exe attached to this process's terminal and return its status."""
        cmd = self.argv(args)
        res = run_cmd(cmd, check=False, capture=False, env=self._child_env())
        log.debug('Attached command exited code={}', res.code)
        return res.code
