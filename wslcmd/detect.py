"""Detection of the wsl.exe location and output encoding for this process."""

from __future__ import annotations

import ntpath
import os
import platform
import sys
from pathlib import Path
from typing import Mapping

from loguru import logger

from .config import DEFAULT_TOOL_NAME, ToolConfig, ToolSettings
from .util import which

log = logger

UTF8_ENV_VAR = 'WSL_UTF8'
WSLENV_VAR = 'WSLENV'


def is_inside_wsl(environ: Mapping[str, str] | None = None) -> bool:
    env = os.environ if environ is None else environ
    if sys.platform == 'win32':
        return False
    if env.get('WSL_DISTRO_NAME') or env.get('WSL_INTEROP'):
        return True
    return Path('/proc/sys/fs/binfmt_misc/WSLInterop').exists()


def _is_wow64(environ: Mapping[str, str]) -> bool:
    # A 32-bit interpreter on a 64-bit OS sees System32 redirected to SysWOW64.
    return (
        platform.architecture()[0] == '32bit'
        and bool(environ.get('PROCESSOR_ARCHITEW6432'))
    )


def resolve_tool_path(
    environ: Mapping[str, str] | None = None,
    *,
    inside_wsl: bool | None = None,
    system: str | None = None,
) -> str:
    env = os.environ if environ is None else environ
    system = system or sys.platform
    override = env.get('WSLCMD_EXE', '')
    if override:
        return override
    if inside_wsl is None:
        inside_wsl = is_inside_wsl(env)
    if inside_wsl or system != 'win32':
        found = which(DEFAULT_TOOL_NAME)
        if found is None:
            log.debug('{} not found on PATH', DEFAULT_TOOL_NAME)
            return DEFAULT_TOOL_NAME
        return found
    system_root = env.get('SystemRoot') or env.get('SYSTEMROOT') or 'C:\\Windows'
    subdir = 'Sysnative' if _is_wow64(env) else 'System32'
    return ntpath.join(system_root, subdir, DEFAULT_TOOL_NAME)


def _append_wslenv(current: str, name: str) -> str:
    parts = [p for p in (current or '').split(':') if p]
    if any(p.split('/', 1)[0] == name for p in parts):
        return ':'.join(parts)
    return ':'.join([*parts, name])


def detect_tool_config(
    settings: ToolSettings | None = None,
    environ: Mapping[str, str] | None = None,
    *,
    inside_wsl: bool | None = None,
) -> ToolConfig:
    """Resolve how wsl.exe is launched from this process.

    wsl.exe writes UTF-16 unless ``WSL_UTF8=1`` is set. When running inside a
    distribution the variable only reaches the Windows side if it is listed in
    ``WSLENV``, so both are placed in the environment overlay of every call.
    """
    settings = settings or ToolSettings()
    env = os.environ if environ is None else environ
    if inside_wsl is None:
        inside_wsl = is_inside_wsl(env)
    exe = settings.exe or resolve_tool_path(env, inside_wsl=inside_wsl)

    overlay: dict[str, str] = {}
    if inside_wsl:
        overlay[UTF8_ENV_VAR] = '1'
        overlay[WSLENV_VAR] = _append_wslenv(
            env.get(WSLENV_VAR, ''), UTF8_ENV_VAR
        )
        encoding = 'utf-8'
    elif settings.utf8:
        overlay[UTF8_ENV_VAR] = '1'
        encoding = 'utf-8'
    elif env.get(UTF8_ENV_VAR) == '1':
        encoding = 'utf-8'
    else:
        encoding = 'utf-16-le'

    cfg = ToolConfig(
        exe=exe, encoding=encoding, inside_wsl=inside_wsl, env_overlay=overlay
    )
    log.debug(
        'Resolved tool config exe={} encoding={} inside_wsl={}',
        cfg.exe,
        cfg.encoding,
        cfg.inside_wsl,
    )
    return cfg
