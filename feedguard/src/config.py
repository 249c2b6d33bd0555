"""Environment configuration for a PriceValidator.

Environment variables:
    NETWORK                  sapphire, sapphire-testnet, sapphire-localnet or an RPC URL
    RPC_URL                  Overrides the RPC URL of NETWORK
    FEEDS                    Comma-separated asset=aggregator pairs
    MAX_STALE_SECONDS        Maximum reading age, 0 disables (default: 0)
    SEQUENCER_ADDRESS        Sequencer uptime feed address (optional)
    SEQUENCER_GRACE_SECONDS  Required sequencer uptime (default: 0)
    RISK_ADMINS              Comma-separated admin identities
    ACL_MANAGER_ADDRESS      On-chain ACL manager, used when RISK_ADMINS is unset
    CLOCK                    "system" (default) or "block"

.. code-block:: python

    >>> settings = EngineSettings.from_env({
    ...     "FEEDS": "btc=0xF4030086522a5bEEa4988F8cA5B36dbC97BeE88c",
    ...     "MAX_STALE_SECONDS": "3600",
    ...     "RISK_ADMINS": "0x5FbDB2315678afecb367f032d93F642f64180aa3",
    ... })
    >>> settings.max_stale_seconds
    3600
    >>> validator = build_validator(settings)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

from .AccessControl import AccessControl, StaticAccessControl
from .ContractUtility import ContractUtility
from .PriceValidator import PriceValidator

logger = logging.getLogger(__name__)

CLOCKS = ("system", "block")


def parse_feeds(feeds_str: str | None) -> dict[str, str]:
    """Parse a comma-separated feed string into a dictionary.

    Format: asset1=address1,asset2=address2

    :param feeds_str: Comma-separated feed string.
    :returns: Dict mapping asset identifiers to aggregator addresses.
    :raises ValueError: If an item is not of the form asset=address.
    """
    if not feeds_str:
        return {}

    feeds = {}
    for item in feeds_str.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise ValueError(f"Invalid feed '{item}'. Expected 'asset=address'")
        asset, address = item.split("=", 1)
        asset, address = asset.strip(), address.strip()
        if not asset or not address:
            raise ValueError(f"Invalid feed '{item}'. Expected 'asset=address'")
        feeds[asset] = address
    return feeds


def parse_list(value: str | None) -> list[str]:
    """Split a comma-separated string, dropping empty items."""
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _parse_seconds(env: Mapping[str, str], name: str) -> int:
    raw = env.get(name) or "0"
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
    return value


@dataclass
class EngineSettings:
    """Settings needed to build a PriceValidator.

    :ivar network: Network name or RPC URL.
    :ivar feeds: Asset to aggregator address mapping.
    :ivar max_stale_seconds: Maximum reading age, 0 disables.
    :ivar sequencer_address: Sequencer uptime feed address, or None.
    :ivar sequencer_grace_seconds: Required sequencer uptime.
    :ivar risk_admins: Static admin identities.
    :ivar acl_manager_address: ACL manager address, used if no static admins.
    :ivar clock: "system" or "block".
    """

    network: str = "sapphire-localnet"
    feeds: dict[str, str] = field(default_factory=dict)
    max_stale_seconds: int = 0
    sequencer_address: str | None = None
    sequencer_grace_seconds: int = 0
    risk_admins: list[str] = field(default_factory=list)
    acl_manager_address: str | None = None
    clock: str = "system"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineSettings:
        """Read settings from environment variables.

        :param environ: Mapping to read from (default: ``os.environ``).
        :returns: Parsed settings.
        :raises ValueError: If a variable has an invalid value.
        """
        env = os.environ if environ is None else environ

        clock = (env.get("CLOCK") or "system").lower()
        if clock not in CLOCKS:
            raise ValueError(f"CLOCK must be one of {CLOCKS}, got {clock!r}")

        return cls(
            network=env.get("NETWORK") or "sapphire-localnet",
            feeds=parse_feeds(env.get("FEEDS")),
            max_stale_seconds=_parse_seconds(env, "MAX_STALE_SECONDS"),
            sequencer_address=env.get("SEQUENCER_ADDRESS") or None,
            sequencer_grace_seconds=_parse_seconds(env, "SEQUENCER_GRACE_SECONDS"),
            risk_admins=parse_list(env.get("RISK_ADMINS")),
            acl_manager_address=env.get("ACL_MANAGER_ADDRESS") or None,
            clock=clock,
        )


def build_validator(
    settings: EngineSettings,
    contract_utility: ContractUtility | None = None,
) -> PriceValidator:
    """Build a PriceValidator reading on-chain aggregators.

    :param settings: Engine settings.
    :param contract_utility: Optional pre-built utility (default: one for
        ``settings.network``).
    :returns: Configured PriceValidator.
    :raises ValueError: If no admin source is configured.
    """
    utility = contract_utility or ContractUtility(settings.network)

    access_control: AccessControl
    if settings.risk_admins:
        access_control = StaticAccessControl(settings.risk_admins)
    elif settings.acl_manager_address:
        access_control = utility.access_control(settings.acl_manager_address)
    else:
        raise ValueError("Either RISK_ADMINS or ACL_MANAGER_ADDRESS must be set")

    feeds = {asset: utility.aggregator(addr) for asset, addr in settings.feeds.items()}
    sequencer = (
        utility.aggregator(settings.sequencer_address)
        if settings.sequencer_address
        else None
    )
    now_fn = utility.block_timestamp if settings.clock == "block" else None

    logger.info(
        f"Building validator on {utility.network}: assets={list(feeds)}, "
        f"clock={settings.clock}"
    )
    return PriceValidator(
        access_control,
        feeds=feeds,
        max_stale_seconds=settings.max_stale_seconds,
        sequencer=sequencer,
        sequencer_grace_seconds=settings.sequencer_grace_seconds,
        now_fn=now_fn,
    )
