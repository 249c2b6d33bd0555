"""Unit tests for round data validation."""

import pytest

from feedguard.src.errors import InvalidAnswerError, PriceStaleError, StaleRoundError
from feedguard.src.RoundData import RoundData
from feedguard.src.staleness import validate_round_data

NOW = 1_700_000_000


def make_round(
    answer: int = 100,
    updated_at: int = NOW,
    round_id: int = 5,
    answered_in_round: int = 5,
) -> RoundData:
    return RoundData(round_id, answer, updated_at, updated_at, answered_in_round)


class TestAnswerValidity:
    """Test rejection of non-positive answers."""

    @pytest.mark.parametrize("answer", [0, -1, -(10**18)])
    def test_non_positive_rejected(self, answer: int) -> None:
        """Zero and negative answers should raise InvalidAnswerError."""
        with pytest.raises(InvalidAnswerError) as exc_info:
            validate_round_data(make_round(answer=answer), 3600, NOW)
        assert exc_info.value.answer == answer

    def test_non_positive_rejected_with_staleness_disabled(self) -> None:
        """Answer check should run even when max_stale_seconds is 0."""
        with pytest.raises(InvalidAnswerError):
            validate_round_data(make_round(answer=0), 0, NOW)

    def test_answer_checked_before_round(self) -> None:
        """A bad answer should win over a carried-over round."""
        with pytest.raises(InvalidAnswerError):
            validate_round_data(make_round(answer=0, answered_in_round=1), 0, NOW)

    def test_asset_in_message(self) -> None:
        """Asset should be reported on the error."""
        with pytest.raises(InvalidAnswerError, match="for 'btc'") as exc_info:
            validate_round_data(make_round(answer=-5), 0, NOW, asset="btc")
        assert exc_info.value.asset == "btc"


class TestRoundConsistency:
    """Test rejection of carried-over answers."""

    def test_carried_over_rejected(self) -> None:
        """answered_in_round < round_id should raise StaleRoundError."""
        with pytest.raises(StaleRoundError) as exc_info:
            validate_round_data(make_round(round_id=7, answered_in_round=6), 0, NOW)
        assert exc_info.value.round_id == 7
        assert exc_info.value.answered_in_round == 6

    def test_round_checked_before_staleness(self) -> None:
        """Round check should run before the time check."""
        with pytest.raises(StaleRoundError):
            validate_round_data(
                make_round(updated_at=0, round_id=2, answered_in_round=1), 60, NOW
            )

    def test_answered_in_later_round_accepted(self) -> None:
        """answered_in_round > round_id should pass."""
        validate_round_data(make_round(round_id=5, answered_in_round=6), 0, NOW)


class TestStaleness:
    """Test time-based staleness."""

    def test_fresh_reading_passes(self) -> None:
        """A reading within the window should pass."""
        validate_round_data(make_round(updated_at=NOW - 30), 60, NOW)

    def test_exact_boundary_passes(self) -> None:
        """Age exactly equal to max_stale_seconds should pass."""
        validate_round_data(make_round(updated_at=NOW - 60), 60, NOW)

    def test_one_second_over_fails(self) -> None:
        """Age strictly above max_stale_seconds should raise PriceStaleError."""
        with pytest.raises(PriceStaleError) as exc_info:
            validate_round_data(make_round(updated_at=NOW - 61), 60, NOW)
        assert exc_info.value.updated_at == NOW - 61
        assert exc_info.value.max_stale_seconds == 60

    def test_disabled_never_stale(self) -> None:
        """max_stale_seconds == 0 should disable the check."""
        validate_round_data(make_round(updated_at=0), 0, NOW)

    def test_future_timestamp_not_stale(self) -> None:
        """Readings stamped after now should not be stale."""
        validate_round_data(make_round(updated_at=NOW + 100), 60, NOW)


class TestRoundData:
    """Test RoundData construction."""

    def test_from_tuple(self) -> None:
        """from_tuple should map latestRoundData positions."""
        data = RoundData.from_tuple((3, 250, 10, 20, 2))
        assert data == RoundData(
            round_id=3, answer=250, started_at=10, updated_at=20, answered_in_round=2
        )
        assert data.is_carried_over

    def test_from_tuple_wrong_length(self) -> None:
        """Tuples with the wrong arity should raise ValueError."""
        with pytest.raises(ValueError, match="Expected 5 round data fields"):
            RoundData.from_tuple((1, 2, 3))
