"""Distribution lifecycle: terminate, convert, set default, unregister, shutdown."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from ..query import filter_distributions, resolve_targets
from ..records import BatchResult, DistributionRecord, DistributionState
from ..registry import DistributionRegistry
from ..runtime import (
    set_default_args,
    set_version_args,
    shutdown_args,
    terminate_args,
    unregister_args,
)

log = logger


def _requery(
    registry: DistributionRegistry, names: Sequence[str]
) -> list[DistributionRecord]:
    if not names:
        return []
    wanted = {n.casefold() for n in names}
    return [r for r in registry.snapshot() if r.name.casefold() in wanted]


def stop_distributions(
    registry: DistributionRegistry,
    *,
    names: Sequence[str] | None = None,
    distributions: Sequence[DistributionRecord] | None = None,
    pass_through: bool = False,
) -> BatchResult:
    result = BatchResult()
    for rec in resolve_targets(registry, distributions, names):
        if rec.state != DistributionState.RUNNING:
            log.warning('Distribution {} is not running.', rec.name)
            result.skipped.append(rec.name)
            continue
        log.info('Terminating distribution {}', rec.name)
        registry.invoker.invoke(terminate_args(rec.name))
        result.changed.append(rec.name)
    if pass_through:
        result.records = _requery(registry, result.changed + result.skipped)
    return result


def set_distribution(
    registry: DistributionRegistry,
    *,
    names: Sequence[str] | None = None,
    distributions: Sequence[DistributionRecord] | None = None,
    version: int | None = None,
    default: bool = False,
    pass_through: bool = False,
) -> BatchResult:
    """Convert distributions to ``version`` and/or make one the default."""
    if version is None and not default:
        raise ValueError('Nothing to change: pass a version or default=True.')
    if version is not None and int(version) not in (1, 2):
        raise ValueError(f'Unsupported WSL version: {version}')
    result = BatchResult()
    for rec in resolve_targets(registry, distributions, names):
        touched = False
        if version is not None:
            if rec.version == int(version):
                log.warning(
                    'Distribution {} is already WSL version {}.',
                    rec.name,
                    version,
                )
            else:
                log.info(
                    'Converting distribution {} to WSL version {}',
                    rec.name,
                    version,
                )
                registry.invoker.invoke(set_version_args(rec.name, version))
                touched = True
        if default:
            if rec.is_default:
                log.warning(
                    'Distribution {} is already the default.', rec.name
                )
            else:
                log.info('Setting default distribution to {}', rec.name)
                registry.invoker.invoke(set_default_args(rec.name))
                touched = True
        if touched:
            result.changed.append(rec.name)
        else:
            result.skipped.append(rec.name)
    if pass_through:
        result.records = _requery(registry, result.changed + result.skipped)
    return result


def remove_distributions(
    registry: DistributionRegistry,
    *,
    names: Sequence[str] | None = None,
    distributions: Sequence[DistributionRecord] | None = None,
) -> BatchResult:
    result = BatchResult()
    for rec in resolve_targets(registry, distributions, names):
        log.info('Unregistering distribution {}', rec.name)
        registry.invoker.invoke(unregister_args(rec.name))
        result.changed.append(rec.name)
    return result


def shutdown(registry: DistributionRegistry) -> None:
    log.info('Shutting down WSL')
    registry.invoker.invoke(shutdown_args())


def list_distributions(
    registry: DistributionRegistry,
    names: Sequence[str] | None = None,
    *,
    default: bool = False,
    state: DistributionState | None = None,
    version: int | None = None,
) -> list[DistributionRecord]:
    return filter_distributions(
        registry.snapshot(),
        names,
        default=default,
        state=state,
        version=version,
    )
