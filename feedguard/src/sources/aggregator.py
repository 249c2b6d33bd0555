"""On-chain AggregatorV3 source.

Reads ``latestRoundData()`` and ``decimals()`` from a Chainlink-compatible
aggregator contract (including sequencer uptime feeds) through web3.
Failures of the RPC transport or contract reverts are raised as
:class:`SourceReadError`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from web3 import Web3
from web3.exceptions import Web3Exception

from ..errors import SourceReadError
from ..RoundData import RoundData
from .base import PriceSource

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)

# Minimal AggregatorV3Interface ABI.
AGGREGATOR_V3_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "latestRoundData",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [
            {"name": "roundId", "type": "uint80"},
            {"name": "answer", "type": "int256"},
            {"name": "startedAt", "type": "uint256"},
            {"name": "updatedAt", "type": "uint256"},
            {"name": "answeredInRound", "type": "uint80"},
        ],
    },
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "function",
        "name": "description",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
]

# Errors raised by web3 calls: RPC/ABI errors, transport errors and
# legacy ValueError-based RPC errors.
_READ_ERRORS = (Web3Exception, OSError, ValueError)


class AggregatorSource(PriceSource):
    """Source backed by an AggregatorV3 contract.

    :ivar contract: Web3 contract instance bound to the aggregator ABI.
    """

    def __init__(self, contract: Contract) -> None:
        """Initialize the source.

        :param contract: Aggregator contract instance.
        """
        self.contract = contract

    @classmethod
    def from_address(cls, w3: Web3, address: str) -> AggregatorSource:
        """Create a source for the aggregator deployed at ``address``.

        :param w3: Connected Web3 instance.
        :param address: Aggregator contract address (any case).
        :returns: New AggregatorSource.
        :raises ValueError: If the address is malformed.
        """
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(address), abi=AGGREGATOR_V3_ABI
        )
        return cls(contract)

    @property
    def address(self) -> str:
        """Return the aggregator contract address."""
        return self.contract.address

    def latest_round_data(self) -> RoundData:
        """Read the latest round from the aggregator.

        :returns: Latest RoundData.
        :raises SourceReadError: If the call fails or returns malformed data.
        """
        raw = self._call("latestRoundData", self.contract.functions.latestRoundData)
        try:
            return RoundData.from_tuple(raw)
        except (TypeError, ValueError) as e:
            raise SourceReadError(f"Malformed round data from {self.address}: {e}") from e

    def decimals(self) -> int:
        """Read the aggregator's decimals.

        :returns: Number of decimals.
        :raises SourceReadError: If the call fails.
        """
        return int(self._call("decimals", self.contract.functions.decimals))

    def description(self) -> str:
        """Read the aggregator's human-readable description (e.g. "BTC / USD").

        :returns: Description string.
        :raises SourceReadError: If the call fails.
        """
        return str(self._call("description", self.contract.functions.description))

    def _call(self, name: str, function: Callable[[], Any]) -> Any:
        try:
            return function().call()
        except _READ_ERRORS as e:
            logger.warning(f"[{self.address}] {name}() failed: {e}")
            raise SourceReadError(f"{name}() failed on {self.address}: {e}") from e

    def __repr__(self) -> str:
        """Return a developer-friendly string representation."""
        return f"AggregatorSource({self.address!r})"

    def __eq__(self, other: object) -> bool:
        """Check equality based on contract address."""
        if not isinstance(other, AggregatorSource):
            return NotImplemented
        return self.address == other.address

    def __hash__(self) -> int:
        """Return hash for use in dicts and sets."""
        return hash(self.address)
