"""Sequencer liveness gate.

On rollups, price sources stop updating while the sequencer is down and
resume with a backlog once it returns. The gate reads a sequencer uptime
source (answer 0 = up, anything else = down) and rejects every query while
the sequencer is down or has been up for no more than the grace period.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .errors import GracePeriodNotOverError, SequencerDownError

if TYPE_CHECKING:
    from .sources import PriceSource

logger = logging.getLogger(__name__)


def check_sequencer(
    sequencer: PriceSource | None,
    grace_seconds: int,
    now: int,
) -> None:
    """Raise unless the sequencer is up and past its grace period.

    :param sequencer: Sequencer uptime source, or None to skip the gate.
    :param grace_seconds: Seconds the sequencer must have been up, or 0 for none.
    :param now: Current unix timestamp.
    :raises SequencerDownError: If the sequencer reports a nonzero status.
    :raises GracePeriodNotOverError: If ``now - updated_at <= grace_seconds``.
    """
    if sequencer is None:
        return

    status = sequencer.latest_round_data()
    if status.answer != 0:
        logger.debug(f"Sequencer {sequencer!r} reports down (status {status.answer})")
        raise SequencerDownError(status.answer)

    # Boundary is inclusive: exactly grace_seconds of uptime still fails
    if grace_seconds != 0 and now - status.updated_at <= grace_seconds:
        raise GracePeriodNotOverError(status.updated_at, now, grace_seconds)
