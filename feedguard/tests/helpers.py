"""Test doubles and constants shared by feedguard tests."""

from __future__ import annotations

from feedguard.src.errors import SourceReadError
from feedguard.src.RoundData import RoundData
from feedguard.src.sources import PriceSource

NOW = 1_700_000_000
ADMIN = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
OUTSIDER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


class FakeSource(PriceSource):
    """In-memory source returning a configurable round."""

    def __init__(
        self,
        answer: int = 100_000_000,
        decimals: int = 8,
        updated_at: int = NOW,
        round_id: int = 1,
        answered_in_round: int | None = None,
        name: str = "fake",
    ) -> None:
        self.answer = answer
        self._decimals = decimals
        self.updated_at = updated_at
        self.round_id = round_id
        self.answered_in_round = round_id if answered_in_round is None else answered_in_round
        self.name = name
        self.fail = False
        self.reads = 0

    def latest_round_data(self) -> RoundData:
        self.reads += 1
        if self.fail:
            raise SourceReadError(f"{self.name} unavailable")
        return RoundData(
            round_id=self.round_id,
            answer=self.answer,
            started_at=self.updated_at,
            updated_at=self.updated_at,
            answered_in_round=self.answered_in_round,
        )

    def decimals(self) -> int:
        return self._decimals

    def __repr__(self) -> str:
        return f"FakeSource({self.name!r})"
