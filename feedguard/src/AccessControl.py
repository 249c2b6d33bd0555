"""AccessControl: Admin-authorization collaborators.

The engine only asks one question of its access control: may this caller
reconfigure me? Implementations decide how the answer is obtained.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Hashable, Iterable

from web3 import Web3
from web3.exceptions import Web3Exception

from .errors import SourceReadError

if TYPE_CHECKING:
    from web3.contract import Contract

logger = logging.getLogger(__name__)

# Minimal ACL manager ABI.
ACL_MANAGER_ABI: list[dict[str, Any]] = [
    {
        "type": "function",
        "name": "isRiskAdmin",
        "stateMutability": "view",
        "inputs": [{"name": "admin", "type": "address"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
]


def _normalize_identity(identity: Hashable) -> Hashable:
    """Lowercase EVM addresses so checksummed and plain forms match."""
    if isinstance(identity, str) and Web3.is_address(identity):
        return identity.lower()
    return identity


class AccessControl(ABC):
    """Abstract base class for admin authorization."""

    @abstractmethod
    def is_authorized_admin(self, caller: Hashable) -> bool:
        """Check whether ``caller`` may change engine configuration.

        :param caller: Caller identity (address, service name, ...).
        :returns: True if the caller is an admin.
        """
        pass


class StaticAccessControl(AccessControl):
    """Access control backed by a fixed set of admin identities.

    .. code-block:: python

        >>> acl = StaticAccessControl(["0x5FbDB2315678afecb367f032d93F642f64180aa3"])
        >>> acl.is_authorized_admin("0x5fbdb2315678afecb367f032d93f642f64180aa3")
        True
        >>> acl.is_authorized_admin("mallory")
        False
    """

    def __init__(self, admins: Iterable[Hashable]) -> None:
        """Initialize with the admin identities.

        :param admins: Identities allowed to reconfigure the engine.
        """
        self._admins = frozenset(_normalize_identity(a) for a in admins)

    def is_authorized_admin(self, caller: Hashable) -> bool:
        """Check membership in the admin set. Unhashable callers are never admins."""
        if not isinstance(caller, Hashable):
            return False
        return _normalize_identity(caller) in self._admins


class ContractAccessControl(AccessControl):
    """Access control delegated to an on-chain ACL manager.

    :ivar contract: ACL manager contract exposing ``isRiskAdmin(address)``.
    """

    def __init__(self, contract: Contract) -> None:
        self.contract = contract

    @classmethod
    def from_address(cls, w3: Web3, address: str) -> ContractAccessControl:
        """Create access control for the ACL manager at ``address``.

        :param w3: Connected Web3 instance.
        :param address: ACL manager contract address.
        :returns: New ContractAccessControl.
        """
        contract = w3.eth.contract(
            address=Web3.to_checksum_address(address), abi=ACL_MANAGER_ABI
        )
        return cls(contract)

    def is_authorized_admin(self, caller: Hashable) -> bool:
        """Ask the ACL manager whether ``caller`` is a risk admin.

        Identities that are not EVM addresses are never admins.

        :raises SourceReadError: If the ACL manager cannot be queried.
        """
        if not isinstance(caller, str) or not Web3.is_address(caller):
            return False
        try:
            return bool(
                self.contract.functions.isRiskAdmin(
                    Web3.to_checksum_address(caller)
                ).call()
            )
        except (Web3Exception, OSError, ValueError) as e:
            logger.warning(f"isRiskAdmin({caller}) failed: {e}")
            raise SourceReadError(f"ACL manager query failed: {e}") from e
