"""Configuration change notifications.

Listeners subscribed to a :class:`ChangeNotifier` receive every event
synchronously, in subscription order, after the change has been applied.

.. code-block:: python

    >>> notifier = ChangeNotifier()
    >>> seen = []
    >>> notifier.subscribe(seen.append)
    >>> notifier.emit(MaxStaleTimeChanged(old_value=0, new_value=3600))
    >>> seen
    [MaxStaleTimeChanged(old_value=0, new_value=3600)]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Hashable, Iterable, Union

if TYPE_CHECKING:
    from .sources import PriceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedSourceChanged:
    """The source for an asset was set, replaced or cleared.

    :ivar asset: Asset whose mapping changed.
    :ivar old_source: Previous source, or None.
    :ivar new_source: New source, or None when cleared.
    """

    asset: Hashable
    old_source: PriceSource | None
    new_source: PriceSource | None


@dataclass(frozen=True)
class MaxStaleTimeChanged:
    """The maximum tolerated reading age changed."""

    old_value: int
    new_value: int


@dataclass(frozen=True)
class SequencerConfigChanged:
    """The sequencer source or grace period changed."""

    new_source: PriceSource | None
    new_grace_seconds: int


ChangeEvent = Union[FeedSourceChanged, MaxStaleTimeChanged, SequencerConfigChanged]
Listener = Callable[[ChangeEvent], Any]


class ChangeNotifier:
    """Delivers change events to subscribed listeners.

    Listener exceptions propagate to the caller that triggered the change,
    once every listener has received every event.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> None:
        """Register a listener.

        :param listener: Callable receiving each event.
        """
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener. Unknown listeners are ignored.

        :param listener: Previously subscribed callable.
        """
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: ChangeEvent) -> None:
        """Deliver an event to every listener.

        :param event: Event to deliver.
        :raises Exception: The first listener error, after all deliveries.
        """
        self.emit_all([event])

    def emit_all(self, events: Iterable[ChangeEvent]) -> None:
        """Deliver several events, in order, to every listener.

        A failing listener does not stop delivery: every event still reaches
        every listener, then the first error is re-raised.

        :param events: Events to deliver.
        :raises Exception: The first listener error, after all deliveries.
        """
        first_error: Exception | None = None
        listeners = list(self._listeners)
        for event in events:
            for listener in listeners:
                try:
                    listener(event)
                except Exception as e:
                    logger.warning(f"Listener {listener!r} failed on {event!r}: {e}")
                    if first_error is None:
                        first_error = e
        if first_error is not None:
            raise first_error
