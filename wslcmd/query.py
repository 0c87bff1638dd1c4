"""Selection of distributions by name pattern, state, version, and default flag."""

from __future__ import annotations

from fnmatch import fnmatchcase
from typing import Iterable, Sequence

from .errors import DistributionNotFoundError
from .records import DistributionRecord, DistributionState


def name_matches(name: str, patterns: Sequence[str]) -> bool:
    key = name.casefold()
    return any(fnmatchcase(key, p.casefold()) for p in patterns)


def filter_distributions(
    records: Iterable[DistributionRecord],
    names: Sequence[str] | None = None,
    *,
    default: bool = False,
    state: DistributionState | None = None,
    version: int | None = None,
) -> list[DistributionRecord]:
    out = list(records)
    if default:
        out = [r for r in out if r.is_default]
    if state is not None:
        out = [r for r in out if r.state == state]
    if version is not None:
        out = [r for r in out if r.version == version]
    if names:
        out = [r for r in out if name_matches(r.name, names)]
    return out


def resolve_targets(
    registry,
    distributions: Sequence[DistributionRecord] | None = None,
    names: Sequence[str] | None = None,
) -> list[DistributionRecord]:
    """Records an operation should act on.

    Explicit records win over name patterns. Patterns are matched against a
    fresh snapshot, and an empty result raises
    :class:`DistributionNotFoundError` before anything is run.
    """
    if distributions:
        return list(distributions)
    if not names:
        raise DistributionNotFoundError('No distribution name was given.')
    found = filter_distributions(registry.snapshot(), names)
    if not found:
        raise DistributionNotFoundError(
            f'There is no distribution matching: {", ".join(names)}'
        )
    return found
