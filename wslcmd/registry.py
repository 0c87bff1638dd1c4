"""Fresh snapshots of installed distributions, enriched from the Lxss store."""

from __future__ import annotations

import ntpath
from dataclasses import replace

from loguru import logger

from .invoker import ProcessInvoker
from .parse import decode_listing
from .records import DistributionRecord
from .runtime import list_args
from .store import LxssEntry, LxssStore, find_entry, strip_long_path_prefix

log = logger

DEFAULT_VHD_FILE_NAME = 'ext4.vhdx'
FALLBACK_DEFAULT_VERSION = 2


def enrich_record(
    rec: DistributionRecord, entry: LxssEntry | None
) -> DistributionRecord:
    if entry is None:
        return rec
    base_path = strip_long_path_prefix(entry.base_path) or None
    disk_image_path = None
    if rec.version == 2 and base_path:
        disk_image_path = ntpath.join(
            base_path, entry.vhd_file_name or DEFAULT_VHD_FILE_NAME
        )
    return replace(
        rec,
        guid=entry.guid or None,
        base_path=base_path,
        disk_image_path=disk_image_path,
    )


class DistributionRegistry:
    """Fresh, uncached view of the installed distributions."""

    def __init__(self, invoker: ProcessInvoker, store: LxssStore | None = None):
        self.invoker = invoker
        self.store = store

    def snapshot(self) -> list[DistributionRecord]:
        lines = self.invoker.invoke(list_args(), ignore_errors=True)
        records = decode_listing(lines)
        if self.store is None or not records:
            return records
        try:
            entries = self.store.entries()
        except OSError as ex:
            log.warning('Could not read distribution configuration: {}', ex)
            return records
        return [enrich_record(r, find_entry(entries, r.name)) for r in records]

    def default_version(self) -> int:
        value = None
        if self.store is not None:
            try:
                value = self.store.default_version()
            except OSError as ex:
                log.warning('Could not read default WSL version: {}', ex)
        return FALLBACK_DEFAULT_VERSION if value is None else int(value)
