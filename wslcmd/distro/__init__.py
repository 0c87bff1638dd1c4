"""Distribution operation exports for lifecycle, transfer, and session helpers."""

from __future__ import annotations

from .info import get_version, list_online
from .lifecycle import (
    list_distributions,
    remove_distributions,
    set_distribution,
    shutdown,
    stop_distributions,
)
from .session import enter_distribution, invoke_command
from .transfer import (
    default_import_name,
    export_distribution,
    import_distribution,
    resolve_export_target,
    resolve_sources,
)

__all__ = [
    'default_import_name',
    'enter_distribution',
    'export_distribution',
    'get_version',
    'import_distribution',
    'invoke_command',
    'list_distributions',
    'list_online',
    'remove_distributions',
    'resolve_export_target',
    'resolve_sources',
    'set_distribution',
    'shutdown',
    'stop_distributions',
]
