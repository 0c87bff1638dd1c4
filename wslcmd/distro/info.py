"""Global queries: component versions and the online distribution catalog."""

from __future__ import annotations

from ..parse import decode_online_listing, decode_version_info
from ..records import OnlineDistribution, VersionInfo
from ..registry import DistributionRegistry
from ..runtime import list_online_args, version_args


def get_version(registry: DistributionRegistry) -> VersionInfo:
    lines = registry.invoker.invoke(version_args())
    return decode_version_info(
        lines, default_distro_version=registry.default_version()
    )


def list_online(registry: DistributionRegistry) -> list[OnlineDistribution]:
    return decode_online_listing(registry.invoker.invoke(list_online_args()))
