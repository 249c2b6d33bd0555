"""
feedguard - Price Feed Validation Module

This module validates third-party price readings and normalizes them to a
common precision:
- PriceValidator: Query facade (single, batch, health check) and admin settings
- FeedRegistry: Per-asset source registry with change notifications
- validate_round_data: Answer, round and staleness checks
- check_sequencer: Sequencer liveness gate with grace period
- normalize_price: Rescaling to PRICE_DECIMALS
- sources: PriceSource interface and on-chain aggregator source
"""

from .AccessControl import AccessControl, ContractAccessControl, StaticAccessControl
from .config import EngineSettings, build_validator
from .EngineConfig import EngineConfig
from .errors import (
    ArrayLengthMismatchError,
    ConfigurationError,
    FeedNotSetError,
    GracePeriodNotOverError,
    InvalidAnswerError,
    LivenessError,
    NotAuthorizedError,
    PriceFeedError,
    PriceOverflowError,
    PriceStaleError,
    ReadingError,
    SequencerDownError,
    SourceReadError,
    StaleRoundError,
)
from .events import (
    ChangeNotifier,
    FeedSourceChanged,
    MaxStaleTimeChanged,
    SequencerConfigChanged,
)
from .FeedRegistry import FeedRegistry
from .normalizer import MAX_UINT256, PRICE_DECIMALS, normalize_price
from .PriceValidator import PriceValidator, ValidatedPrice
from .RoundData import RoundData
from .sequencer import check_sequencer
from .sources import AggregatorSource, PriceSource
from .staleness import validate_round_data

__all__ = [
    "AccessControl",
    "AggregatorSource",
    "ArrayLengthMismatchError",
    "ChangeNotifier",
    "ConfigurationError",
    "ContractAccessControl",
    "EngineConfig",
    "EngineSettings",
    "FeedNotSetError",
    "FeedRegistry",
    "FeedSourceChanged",
    "GracePeriodNotOverError",
    "InvalidAnswerError",
    "LivenessError",
    "MAX_UINT256",
    "MaxStaleTimeChanged",
    "NotAuthorizedError",
    "PRICE_DECIMALS",
    "PriceFeedError",
    "PriceOverflowError",
    "PriceSource",
    "PriceStaleError",
    "PriceValidator",
    "ReadingError",
    "RoundData",
    "SequencerConfigChanged",
    "SequencerDownError",
    "SourceReadError",
    "StaleRoundError",
    "ValidatedPrice",
    "build_validator",
    "check_sequencer",
    "normalize_price",
    "validate_round_data",
]
