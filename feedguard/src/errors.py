"""Error taxonomy for price validation.

Every failure raised by the engine derives from :class:`PriceFeedError` and
falls into one of four families:

- :class:`ConfigurationError`: missing feed, unauthorized caller, bad batch input
- :class:`ReadingError`: the source returned an unusable round
- :class:`LivenessError`: the sequencer gate rejected the query
- :class:`PriceOverflowError`: normalization exceeded the canonical range

None of these are retried by the engine itself.
"""

from __future__ import annotations

from typing import Any, Hashable


class PriceFeedError(Exception):
    """Base exception for price validation errors."""

    pass


class ConfigurationError(PriceFeedError):
    """Raised when the engine configuration does not allow the operation."""

    pass


class FeedNotSetError(ConfigurationError):
    """Raised when no source is configured for an asset.

    :ivar asset: Asset that has no source.
    """

    def __init__(self, asset: Hashable):
        self.asset = asset
        super().__init__(f"No price feed set for asset {asset!r}")


class NotAuthorizedError(ConfigurationError):
    """Raised when a caller fails the admin-authorization check.

    :ivar caller: Identity that attempted the change.
    """

    def __init__(self, caller: Any):
        self.caller = caller
        super().__init__(f"Caller {caller!r} is not an authorized admin")


class ArrayLengthMismatchError(ConfigurationError):
    """Raised when batch admin inputs have different lengths.

    :ivar assets_length: Number of assets supplied.
    :ivar sources_length: Number of sources supplied.
    """

    def __init__(self, assets_length: int, sources_length: int):
        self.assets_length = assets_length
        self.sources_length = sources_length
        super().__init__(
            f"Length mismatch: {assets_length} assets vs {sources_length} sources"
        )


class ReadingError(PriceFeedError):
    """Raised when a source reading cannot be trusted.

    :ivar asset: Asset the reading belongs to, if known.
    """

    asset: Hashable | None = None


class InvalidAnswerError(ReadingError):
    """Raised when a source reports a zero or negative answer.

    :ivar answer: The rejected answer.
    """

    def __init__(self, answer: int, asset: Hashable | None = None):
        self.answer = answer
        self.asset = asset
        super().__init__(f"Invalid answer {answer}{_for(asset)}")


class StaleRoundError(ReadingError):
    """Raised when the answer was carried over from an earlier round.

    :ivar round_id: Round the reading claims to belong to.
    :ivar answered_in_round: Round the answer was actually computed in.
    """

    def __init__(
        self, round_id: int, answered_in_round: int, asset: Hashable | None = None
    ):
        self.round_id = round_id
        self.answered_in_round = answered_in_round
        self.asset = asset
        super().__init__(
            f"Stale round{_for(asset)}: answered in round {answered_in_round} "
            f"< round {round_id}"
        )


class PriceStaleError(ReadingError):
    """Raised when a reading is older than the configured maximum age.

    :ivar updated_at: Unix timestamp of the reading.
    :ivar now: Unix timestamp the reading was evaluated at.
    :ivar max_stale_seconds: Configured maximum age.
    """

    def __init__(
        self,
        updated_at: int,
        now: int,
        max_stale_seconds: int,
        asset: Hashable | None = None,
    ):
        self.updated_at = updated_at
        self.now = now
        self.max_stale_seconds = max_stale_seconds
        self.asset = asset
        super().__init__(
            f"Price stale{_for(asset)}: updated {now - updated_at}s ago, "
            f"max {max_stale_seconds}s"
        )


class SourceReadError(ReadingError):
    """Raised when a source cannot be read at all (RPC failure, revert)."""

    pass


class LivenessError(PriceFeedError):
    """Raised when the sequencer liveness gate rejects a query."""

    pass


class SequencerDownError(LivenessError):
    """Raised when the sequencer reports it is down.

    :ivar answer: Raw sequencer status (0 = up).
    """

    def __init__(self, answer: int):
        self.answer = answer
        super().__init__(f"Sequencer is down (status {answer})")


class GracePeriodNotOverError(LivenessError):
    """Raised while the sequencer has not been up for the full grace period.

    :ivar up_since: Unix timestamp of the sequencer status update.
    :ivar now: Unix timestamp the gate was evaluated at.
    :ivar grace_seconds: Configured grace period.
    """

    def __init__(self, up_since: int, now: int, grace_seconds: int):
        self.up_since = up_since
        self.now = now
        self.grace_seconds = grace_seconds
        super().__init__(
            f"Sequencer grace period not over: up for {now - up_since}s, "
            f"need more than {grace_seconds}s"
        )


class PriceOverflowError(PriceFeedError, ArithmeticError):
    """Raised when a normalized price does not fit the canonical range.

    :ivar raw_value: Raw source value.
    :ivar source_decimals: Decimals the raw value was expressed in.
    """

    def __init__(self, raw_value: int, source_decimals: int):
        self.raw_value = raw_value
        self.source_decimals = source_decimals
        super().__init__(
            f"Normalizing {raw_value} from {source_decimals} decimals overflows"
        )


def _for(asset: Hashable | None) -> str:
    return f" for {asset!r}" if asset is not None else ""
