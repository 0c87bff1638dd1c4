"""Running commands inside a distribution and entering it interactively."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from ..errors import DistributionNotFoundError, ExternalToolFailure
from ..query import filter_distributions, resolve_targets
from ..records import DistributionRecord
from ..registry import DistributionRegistry
from ..runtime import run_command_args, session_args
from ..util import shell_join

log = logger

GUEST_OUTPUT_ENCODING = 'utf-8'


def _default_target(registry: DistributionRegistry) -> list[DistributionRecord]:
    found = filter_distributions(registry.snapshot(), default=True)
    if not found:
        raise DistributionNotFoundError('There is no default distribution.')
    return found


def _targets(
    registry: DistributionRegistry,
    names: Sequence[str] | None,
    distributions: Sequence[DistributionRecord] | None,
) -> list[DistributionRecord]:
    if not names and not distributions:
        return _default_target(registry)
    return resolve_targets(registry, distributions, names)


def invoke_command(
    registry: DistributionRegistry,
    command: Sequence[str] | str,
    *,
    names: Sequence[str] | None = None,
    distributions: Sequence[DistributionRecord] | None = None,
    user: str = '',
    working_dir: str = '',
    shell_type: str = '',
    system: bool = False,
    capture: bool = True,
) -> list[str]:
    """Run ``command`` in each selected distribution, one after another.

    Without names or records the default distribution is used. A string
    command goes through the distribution's shell; a sequence is executed
    directly. With ``capture`` the (UTF-8) output lines of all runs are
    returned; otherwise the command is attached to this terminal. A non-zero
    exit status raises :class:`ExternalToolFailure` carrying that status.
    """
    out: list[str] = []
    for rec in _targets(registry, names, distributions):
        args = run_command_args(
            rec.name,
            command,
            user=user,
            working_dir=working_dir,
            shell_type=shell_type,
            system=system,
        )
        log.debug('Running command in {}', rec.name)
        if capture:
            out.extend(
                registry.invoker.invoke(args, encoding=GUEST_OUTPUT_ENCODING)
            )
            continue
        code = registry.invoker.run_attached(args)
        if code != 0:
            raise ExternalToolFailure(
                shell_join(registry.invoker.argv(args)), code
            )
    return out


def enter_distribution(
    registry: DistributionRegistry,
    *,
    name: str = '',
    distribution: DistributionRecord | None = None,
    user: str = '',
    working_dir: str = '',
    shell_type: str = '',
    system: bool = False,
) -> int:
    """Open an interactive session and return its exit status."""
    if distribution is not None:
        rec = distribution
    else:
        targets = _targets(registry, [name] if name else None, None)
        if len(targets) > 1:
            log.warning(
                'Pattern {!r} matches {} distributions; entering {}.',
                name,
                len(targets),
                targets[0].name,
            )
        rec = targets[0]
    args = session_args(
        rec.name,
        user=user,
        working_dir=working_dir,
        shell_type=shell_type,
        system=system,
    )
    log.info('Entering distribution {}', rec.name)
    return registry.invoker.run_attached(args)
