"""EngineConfig: Immutable snapshot of a validator's configuration.

Queries take one snapshot at call start and use it for the whole pipeline,
so a concurrent update is either fully visible or not visible at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Hashable, Mapping

if TYPE_CHECKING:
    from .sources import PriceSource


@dataclass(frozen=True)
class EngineConfig:
    """Configuration observed by a single query.

    :ivar feeds: Read-only mapping of asset to source.
    :ivar max_stale_seconds: Maximum tolerated reading age, 0 = disabled.
    :ivar sequencer: Sequencer uptime source, or None.
    :ivar sequencer_grace_seconds: Required sequencer uptime, 0 = none.
    """

    feeds: Mapping[Hashable, PriceSource] = field(
        default_factory=lambda: MappingProxyType({})
    )
    max_stale_seconds: int = 0
    sequencer: PriceSource | None = None
    sequencer_grace_seconds: int = 0

    def source_of(self, asset: Hashable) -> PriceSource | None:
        """Get the source configured for ``asset``, or None."""
        return self.feeds.get(asset)
