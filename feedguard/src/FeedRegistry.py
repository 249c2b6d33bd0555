"""FeedRegistry: Per-asset mapping of price sources.

The registry is copy-on-write: every mutation builds a new dict and swaps it
in under the lock, so :meth:`FeedRegistry.snapshot` can hand out the current
mapping without copying.

.. code-block:: python

    >>> registry = FeedRegistry(StaticAccessControl(["admin"]))
    >>> registry.set_source("admin", "btc", btc_source)
    >>> registry.get_source("btc") is btc_source
    True
    >>> registry.set_source("admin", "btc", None)
    >>> registry.get_source("btc") is None
    True
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Hashable, Mapping, Sequence

from .errors import ArrayLengthMismatchError, NotAuthorizedError
from .events import ChangeNotifier, FeedSourceChanged
from .sources import PriceSource

if TYPE_CHECKING:
    from .AccessControl import AccessControl

logger = logging.getLogger(__name__)


def require_source(source: object) -> None:
    """Reject anything that is neither None nor a PriceSource.

    :param source: Candidate source handle.
    :raises TypeError: If ``source`` is not a PriceSource or None.
    """
    if source is not None and not isinstance(source, PriceSource):
        raise TypeError(
            f"Source must be a PriceSource or None, got {type(source).__name__}: {source!r}"
        )


class FeedRegistry:
    """Admin-mutable mapping of asset to source.

    :ivar access_control: Collaborator deciding who may mutate the registry.
    :ivar notifier: Receives a FeedSourceChanged event per changed asset.
    """

    def __init__(
        self,
        access_control: AccessControl,
        feeds: Mapping[Hashable, PriceSource | None] | None = None,
        notifier: ChangeNotifier | None = None,
        lock: threading.RLock | None = None,
    ) -> None:
        """Initialize the registry.

        :param access_control: Admin-authorization collaborator.
        :param feeds: Optional initial mapping. Applied without authorization
            and without notifications; None values are skipped.
        :param notifier: Change notifier (default: a private one).
        :param lock: Lock shared with the owning engine (default: a private one).
        """
        self.access_control = access_control
        self.notifier = notifier or ChangeNotifier()
        self._lock = lock or threading.RLock()
        initial = {a: s for a, s in (feeds or {}).items() if s is not None}
        for source in initial.values():
            require_source(source)
        self._feeds: Mapping[Hashable, PriceSource] = MappingProxyType(initial)

    def get_source(self, asset: Hashable) -> PriceSource | None:
        """Get the source configured for ``asset``.

        :param asset: Asset identifier.
        :returns: Configured source, or None if unset.
        """
        return self._feeds.get(asset)

    def snapshot(self) -> Mapping[Hashable, PriceSource]:
        """Get a read-only view of the current mapping.

        Later mutations never change a returned snapshot.
        """
        with self._lock:
            return self._feeds

    def set_source(
        self, caller: Hashable, asset: Hashable, source: PriceSource | None
    ) -> None:
        """Set, replace or clear the source of one asset.

        :param caller: Identity performing the change.
        :param asset: Asset identifier.
        :param source: New source, or None to clear the mapping.
        :raises NotAuthorizedError: If ``caller`` is not an admin.
        """
        self.set_sources(caller, [asset], [source])

    def set_sources(
        self,
        caller: Hashable,
        assets: Sequence[Hashable],
        sources: Sequence[PriceSource | None],
    ) -> None:
        """Set, replace or clear the sources of several assets at once.

        The batch is applied atomically: either every mapping changes or none.

        :param caller: Identity performing the change.
        :param assets: Asset identifiers.
        :param sources: Sources matching ``assets`` by position (None clears).
        :raises NotAuthorizedError: If ``caller`` is not an admin.
        :raises ArrayLengthMismatchError: If the sequences differ in length.
        :raises TypeError: If a source is not a PriceSource or None.
        """
        if not self.access_control.is_authorized_admin(caller):
            raise NotAuthorizedError(caller)
        if len(assets) != len(sources):
            raise ArrayLengthMismatchError(len(assets), len(sources))
        for source in sources:
            require_source(source)

        events: list[FeedSourceChanged] = []
        with self._lock:
            updated = dict(self._feeds)
            for asset, source in zip(assets, sources):
                old = updated.get(asset)
                if source is None:
                    updated.pop(asset, None)
                else:
                    updated[asset] = source
                events.append(FeedSourceChanged(asset, old, source))
            self._feeds = MappingProxyType(updated)

        for event in events:
            if event.new_source is None:
                logger.info(f"Feed for {event.asset!r} cleared (was {event.old_source!r})")
            else:
                logger.info(
                    f"Feed for {event.asset!r} set to {event.new_source!r} "
                    f"(was {event.old_source!r})"
                )
        self.notifier.emit_all(events)

    def __len__(self) -> int:
        """Return the number of configured assets."""
        return len(self._feeds)
