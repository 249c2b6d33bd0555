"""ContractUtility: Web3 initialization and contract construction."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from web3 import Web3

from .AccessControl import ContractAccessControl
from .sources import AggregatorSource

if TYPE_CHECKING:
    from .AccessControl import AccessControl
    from .sources import PriceSource

NETWORKS = {
    "sapphire": "https://sapphire.oasis.io",
    "sapphire-testnet": "https://testnet.sapphire.oasis.io",
    "sapphire-localnet": "http://localhost:8545",
}


class ContractUtility:
    """Utility for the Web3 connection and the contracts the engine reads.

    :ivar network: Network RPC URL.
    :ivar w3: Configured Web3 instance.
    """

    def __init__(self, network_name: str) -> None:
        """Initialize the contract utility.

        :param network_name: Name of a known network, or an RPC URL.
        """
        # RPC_URL env var overrides the default for the network
        self.network = os.environ.get("RPC_URL") or NETWORKS.get(network_name, network_name)
        self.w3 = Web3(Web3.HTTPProvider(self.network))

    def aggregator(self, address: str) -> PriceSource:
        """Get a source for the aggregator contract at ``address``.

        :param address: Aggregator contract address.
        :returns: AggregatorSource bound to this connection.
        """
        return AggregatorSource.from_address(self.w3, address)

    def access_control(self, address: str) -> AccessControl:
        """Get access control delegated to the ACL manager at ``address``.

        :param address: ACL manager contract address.
        :returns: ContractAccessControl bound to this connection.
        """
        return ContractAccessControl.from_address(self.w3, address)

    def block_timestamp(self) -> int:
        """Get the timestamp of the latest block.

        :returns: Unix timestamp of the chain head.
        """
        return int(self.w3.eth.get_block("latest")["timestamp"])
