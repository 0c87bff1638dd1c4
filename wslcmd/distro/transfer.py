"""Export and import of distributions as tar archives or VHDX images."""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Sequence

from loguru import logger

from ..errors import DestinationExistsError
from ..query import resolve_targets
from ..records import DistributionRecord, ExportFormat
from ..registry import DistributionRegistry
from ..runtime import export_args, import_args, import_in_place_args
from ..util import expand_path

log = logger

TAR_EXTENSION = '.tar.gz'
VHD_EXTENSION = '.vhdx'

_ARCHIVE_SUFFIXES = ('.tar.gz', '.tar.xz', '.tgz', '.tar', '.vhdx')


def resolve_export_target(
    destination: str | Path,
    fmt: ExportFormat | str = ExportFormat.AUTO,
    *,
    name: str = '',
) -> tuple[Path, bool]:
    """Final file path and whether the VHDX format is used.

    An explicit format wins. When ``destination`` is an existing directory
    the file name is ``<name>`` plus the extension of the format (tar when
    automatic). Otherwise the extension of ``destination`` decides.
    """
    fmt = ExportFormat.parse(fmt)
    path = Path(destination)
    if path.is_dir():
        use_vhd = fmt == ExportFormat.VHD
        ext = VHD_EXTENSION if use_vhd else TAR_EXTENSION
        return path / f'{name}{ext}', use_vhd
    if fmt != ExportFormat.AUTO:
        return path, fmt == ExportFormat.VHD
    return path, path.suffix.lower() == VHD_EXTENSION


def export_distribution(
    registry: DistributionRegistry,
    destination: str | Path,
    *,
    names: Sequence[str] | None = None,
    distributions: Sequence[DistributionRecord] | None = None,
    fmt: ExportFormat | str = ExportFormat.AUTO,
) -> list[Path]:
    targets = resolve_targets(registry, distributions, names)
    dest = expand_path(destination)
    if len(targets) > 1 and not dest.is_dir():
        raise ValueError(
            'Exporting several distributions requires a destination directory.'
        )
    planned: list[tuple[DistributionRecord, Path, bool]] = []
    for rec in targets:
        path, use_vhd = resolve_export_target(dest, fmt, name=rec.name)
        if path.exists():
            raise DestinationExistsError(f'Destination already exists: {path}')
        planned.append((rec, path, use_vhd))
    out: list[Path] = []
    for rec, path, use_vhd in planned:
        log.info('Exporting distribution {} to {}', rec.name, path)
        registry.invoker.invoke(export_args(rec.name, str(path), vhd=use_vhd))
        out.append(path)
    return out


def default_import_name(source: str | Path) -> str:
    base = Path(source).name
    lower = base.lower()
    for suffix in _ARCHIVE_SUFFIXES:
        if lower.endswith(suffix) and len(base) > len(suffix):
            return base[: -len(suffix)]
    return Path(base).stem or base


def resolve_sources(paths: Sequence[str | Path]) -> list[Path]:
    """Expand glob patterns and literal paths to existing files."""
    out: list[Path] = []
    for raw in paths:
        text = str(expand_path(raw))
        if glob.has_magic(text):
            matches = sorted(Path(m) for m in glob.glob(text))
            files = [m for m in matches if m.is_file()]
            if not files:
                raise FileNotFoundError(f'No files match: {raw}')
            out.extend(files)
            continue
        path = Path(text)
        if not path.is_file():
            raise FileNotFoundError(f'Import source not found: {raw}')
        out.append(path)
    return out


def import_distribution(
    registry: DistributionRegistry,
    paths: Sequence[str | Path],
    destination: str | Path | None = None,
    *,
    name: str = '',
    version: int | None = None,
    raw_destination: bool = False,
    fmt: ExportFormat | str = ExportFormat.AUTO,
    in_place: bool = False,
) -> list[DistributionRecord]:
    """Register distributions from archives or disk images.

    Without ``raw_destination`` each distribution is installed to
    ``<destination>/<name>``. With ``in_place`` the image is registered where
    it is and ``destination`` is ignored.
    """
    sources = resolve_sources(paths)
    if name and len(sources) > 1:
        raise ValueError('A name can only be given when importing one file.')
    if not in_place and destination is None:
        raise ValueError('An install destination is required.')
    if version is not None and int(version) not in (1, 2):
        raise ValueError(f'Unsupported WSL version: {version}')

    imported: list[str] = []
    for src in sources:
        dist_name = name or default_import_name(src)
        if in_place:
            log.info('Importing {} in place from {}', dist_name, src)
            registry.invoker.invoke(import_in_place_args(dist_name, str(src)))
        else:
            _, use_vhd = resolve_export_target(src, fmt)
            dest = expand_path(destination)
            if not raw_destination:
                dest = dest / dist_name
            log.info('Importing {} from {} into {}', dist_name, src, dest)
            registry.invoker.invoke(
                import_args(
                    dist_name,
                    str(dest),
                    str(src),
                    version=version,
                    vhd=use_vhd,
                )
            )
        imported.append(dist_name)

    wanted = {n.casefold() for n in imported}
    return [r for r in registry.snapshot() if r.name.casefold() in wanted]
