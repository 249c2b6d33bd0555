"""
Price sources.

Usage:
    from feedguard.src.sources import AggregatorSource

    source = AggregatorSource.from_address(w3, "0x...")
    round_data = source.latest_round_data()
    decimals = source.decimals()
"""

from .aggregator import AGGREGATOR_V3_ABI, AggregatorSource
from .base import PriceSource

__all__ = [
    "AGGREGATOR_V3_ABI",
    "AggregatorSource",
    "PriceSource",
]
