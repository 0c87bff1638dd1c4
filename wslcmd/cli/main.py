"""Modal CLI entry point: command aliases, verbosity and loguru setup."""

from __future__ import annotations

import os
import sys

import scriptconfig as scfg
from loguru import logger

from ..config import load_or_default
from ._common import _cfg_path, log
from .config import ConfigModalCLI
from .distro import ExportCLI, ImportCLI, ListCLI, RemoveCLI, SetCLI, StopCLI
from .help import HelpModalCLI
from .host import DoctorCLI, OnlineCLI, ShutdownCLI, VersionCLI
from .session import EnterCLI, InvokeCLI

LOG_FORMAT = (
    '<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | '
    '<level>{level: <8}</level> | '
    '<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - '
    '<level>{message}</level>'
)

# First-word spellings accepted in addition to the declared command names.
# ``import`` and ``version`` cannot be attribute names on the modal class.
COMMAND_ALIASES = {
    'import': 'import_',
    'version': 'version_',
    'ls': 'list',
    'exec': 'invoke',
    'run': 'invoke',
    'rm': 'remove',
    'unregister': 'remove',
    'terminate': 'stop',
    'kill': 'stop',
}


class WslModalCLI(scfg.ModalCLI):
    """Manage WSL distributions through wsl.exe."""

    list = ListCLI
    online = OnlineCLI
    stop = StopCLI
    set = SetCLI
    remove = RemoveCLI
    export = ExportCLI
    import_ = ImportCLI
    invoke = InvokeCLI
    enter = EnterCLI
    shutdown = ShutdownCLI
    version_ = VersionCLI
    doctor = DoctorCLI
    config = ConfigModalCLI
    help = HelpModalCLI


def main(argv: list[str] | None = None) -> None:
    argv = _normalize_argv(sys.argv[1:] if argv is None else argv)
    _setup_logging(_count_verbose(argv), _configured_verbosity(argv))
    try:
        rc = WslModalCLI.main(argv=argv, _noexit=True)
    except KeyboardInterrupt:
        sys.exit(130)
    except Exception as ex:
        print(f'ERROR: {ex}', file=sys.stderr)
        log.error('wslcmd failed: {}', ex)
        sys.exit(2)
    if '-h' in argv or '--help' in argv:
        sys.exit(0)
    sys.exit(rc if isinstance(rc, int) else 0)


def _configured_verbosity(argv: list[str]) -> int:
    """Verbosity from the config file named on the command line, if any."""
    config_value = None
    if '--config' in argv:
        idx = argv.index('--config')
        if idx + 1 < len(argv):
            config_value = argv[idx + 1]
    try:
        return load_or_default(_cfg_path(config_value)).verbosity
    except Exception:
        return 1


def _setup_logging(args_verbose: int, cfg_verbosity: int) -> None:
    logger.remove()
    verbosity = args_verbose or cfg_verbosity
    if verbosity >= 2:
        level = 'DEBUG'
    elif verbosity == 1:
        level = 'INFO'
    else:
        level = 'WARNING'
    colorize = sys.stderr.isatty() and os.getenv('NO_COLOR') is None
    logger.add(sys.stderr, level=level, colorize=colorize, format=LOG_FORMAT)
    log.debug('Logging at {} (verbosity={})', level, verbosity)


def _normalize_argv(argv: list[str]) -> list[str]:
    """Map accepted spellings of the first word to scriptconfig command names."""
    if argv and argv[0] in COMMAND_ALIASES:
        return [COMMAND_ALIASES[argv[0]], *argv[1:]]
    return list(argv)


def _count_verbose(argv: list[str]) -> int:
    """Count ``-v``/``--verbose`` flags, ignoring anything after ``--``."""
    count = 0
    for item in argv:
        if item == '--':
            break
        if item == '--verbose':
            count += 1
        elif item[:1] == '-' and item[1:2] != '-' and item[1:]:
            if set(item[1:]) == {'v'}:
                count += len(item) - 1
    return count
