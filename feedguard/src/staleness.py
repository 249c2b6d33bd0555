"""Staleness and validity checks for a single source reading.

Checks run in a fixed order:
    1. Reject zero or negative answers
    2. Reject answers carried over from an earlier round
    3. Reject readings older than ``max_stale_seconds`` (0 disables this check)

The first two checks always run, so a malformed reading is rejected even
when staleness checking is disabled.
"""

from __future__ import annotations

from typing import Hashable

from .errors import InvalidAnswerError, PriceStaleError, StaleRoundError
from .RoundData import RoundData


def validate_round_data(
    round_data: RoundData,
    max_stale_seconds: int,
    now: int,
    asset: Hashable | None = None,
) -> None:
    """Validate a reading, raising on the first failed check.

    :param round_data: Reading returned by the source.
    :param max_stale_seconds: Maximum tolerated age, or 0 to disable.
    :param now: Current unix timestamp.
    :param asset: Optional asset identifier, used in error messages.
    :raises InvalidAnswerError: If the answer is not positive.
    :raises StaleRoundError: If ``answered_in_round < round_id``.
    :raises PriceStaleError: If the reading is older than ``max_stale_seconds``.

    .. code-block:: python

        >>> validate_round_data(RoundData(1, 100, 0, 990, 1), 60, now=1000)
        >>> validate_round_data(RoundData(1, 100, 0, 900, 1), 60, now=1000)
        Traceback (most recent call last):
        ...
        feedguard.src.errors.PriceStaleError: Price stale: updated 100s ago, max 60s
    """
    if round_data.answer <= 0:
        raise InvalidAnswerError(round_data.answer, asset)

    if round_data.is_carried_over:
        raise StaleRoundError(round_data.round_id, round_data.answered_in_round, asset)

    # Readings stamped in the future have a negative age and are never stale
    if max_stale_seconds != 0 and now - round_data.updated_at > max_stale_seconds:
        raise PriceStaleError(round_data.updated_at, now, max_stale_seconds, asset)
