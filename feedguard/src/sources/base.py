"""Base source interface.

A source is any object that can report its latest round and the number of
decimals its answers are expressed in. Price feeds and sequencer uptime
feeds share this interface; the engine never stores what a source returns.

.. code-block:: python

    class ConstantSource(PriceSource):
        def latest_round_data(self) -> RoundData:
            return RoundData(1, 100_000_000, 0, int(time.time()), 1)

        def decimals(self) -> int:
            return 8
"""

from abc import ABC, abstractmethod

from ..RoundData import RoundData


class PriceSource(ABC):
    """Abstract base class for price and sequencer sources."""

    @abstractmethod
    def latest_round_data(self) -> RoundData:
        """Read the latest round from the source.

        :returns: Latest RoundData.
        :raises SourceReadError: If the source cannot be read.
        """
        pass

    @abstractmethod
    def decimals(self) -> int:
        """Get the native decimals of the source's answers.

        :returns: Number of decimals.
        :raises SourceReadError: If the source cannot be read.
        """
        pass
