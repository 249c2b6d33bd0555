"""RoundData: A single reading reported by a price or sequencer source.

Mirrors the return value of an AggregatorV3 ``latestRoundData()`` call:

.. code-block:: python

    >>> data = RoundData.from_tuple((42, 5000000000000, 1700000000, 1700000060, 42))
    >>> data.answer
    5000000000000
    >>> data.is_carried_over
    False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class RoundData:
    """One round of a source.

    :ivar round_id: Round identifier.
    :ivar answer: Reported value in the source's native decimals.
    :ivar started_at: Unix timestamp the round started.
    :ivar updated_at: Unix timestamp the answer was last updated.
    :ivar answered_in_round: Round in which the answer was computed.
    """

    round_id: int
    answer: int
    started_at: int
    updated_at: int
    answered_in_round: int

    @property
    def is_carried_over(self) -> bool:
        """Check if the answer was produced in an earlier round than claimed."""
        return self.answered_in_round < self.round_id

    @classmethod
    def from_tuple(cls, values: Sequence[int]) -> RoundData:
        """Build a RoundData from a ``latestRoundData()`` 5-tuple.

        :param values: (roundId, answer, startedAt, updatedAt, answeredInRound).
        :returns: New RoundData instance.
        :raises ValueError: If the sequence does not have exactly 5 items.
        """
        if len(values) != 5:
            raise ValueError(
                f"Expected 5 round data fields, got {len(values)}: {values!r}"
            )
        round_id, answer, started_at, updated_at, answered_in_round = values
        return cls(
            round_id=int(round_id),
            answer=int(answer),
            started_at=int(started_at),
            updated_at=int(updated_at),
            answered_in_round=int(answered_in_round),
        )
