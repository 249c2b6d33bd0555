"""PriceValidator: Validated, normalized price queries.

Each query runs the same pipeline against one configuration snapshot:
    1. Sequencer liveness gate (if a sequencer is configured)
    2. Feed lookup for the asset
    3. Read of the source's latest round
    4. Validity and staleness checks
    5. Rescaling to PRICE_DECIMALS

Any failed step raises immediately. :meth:`PriceValidator.is_price_valid`
is the only entry point that turns a failure into a boolean.

.. code-block:: python

    >>> validator = PriceValidator(
    ...     StaticAccessControl(["admin"]),
    ...     feeds={"btc": AggregatorSource.from_address(w3, btc_usd_address)},
    ...     max_stale_seconds=3600,
    ... )
    >>> validator.get_price("btc")
    6512345000000
    >>> validator.is_price_valid("eth")
    False
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Hashable, Mapping, Sequence

from .EngineConfig import EngineConfig
from .errors import FeedNotSetError, NotAuthorizedError
from .events import ChangeNotifier, Listener, MaxStaleTimeChanged, SequencerConfigChanged
from .FeedRegistry import FeedRegistry, require_source
from .normalizer import PRICE_DECIMALS, normalize_price
from .sequencer import check_sequencer
from .staleness import validate_round_data

if TYPE_CHECKING:
    from .AccessControl import AccessControl
    from .sources import PriceSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedPrice:
    """A price that passed every check.

    :ivar asset: Asset the price belongs to.
    :ivar price: Price scaled to PRICE_DECIMALS.
    :ivar round_id: Source round the price was read from.
    :ivar updated_at: Unix timestamp of the source round.
    :ivar source_decimals: Native decimals of the source.
    """

    asset: Hashable
    price: int
    round_id: int
    updated_at: int
    source_decimals: int


def _system_time() -> int:
    return int(time.time())


def _require_unsigned(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


class PriceValidator:
    """Validation and normalization engine for per-asset price sources.

    :ivar access_control: Admin-authorization collaborator.
    :ivar notifier: Delivers configuration change events.
    :ivar registry: Per-asset source registry.
    :ivar now_fn: Callable returning the current unix timestamp.
    """

    def __init__(
        self,
        access_control: AccessControl,
        feeds: Mapping[Hashable, PriceSource | None] | None = None,
        max_stale_seconds: int = 0,
        sequencer: PriceSource | None = None,
        sequencer_grace_seconds: int = 0,
        now_fn: Callable[[], int] | None = None,
    ) -> None:
        """Initialize the validator.

        :param access_control: Decides who may change the configuration.
        :param feeds: Optional initial asset to source mapping.
        :param max_stale_seconds: Maximum reading age (default: 0, disabled).
        :param sequencer: Optional sequencer uptime source.
        :param sequencer_grace_seconds: Required sequencer uptime (default: 0).
        :param now_fn: Clock returning unix seconds (default: system time).
        :raises ValueError: If a duration is negative.
        :raises TypeError: If a source is not a PriceSource or None.
        """
        _require_unsigned("max_stale_seconds", max_stale_seconds)
        _require_unsigned("sequencer_grace_seconds", sequencer_grace_seconds)
        require_source(sequencer)

        self.access_control = access_control
        self.now_fn = now_fn or _system_time
        self.notifier = ChangeNotifier()

        # Guards the registry mapping and the settings below as one unit
        self._lock = threading.RLock()
        self.registry = FeedRegistry(
            access_control, feeds=feeds, notifier=self.notifier, lock=self._lock
        )
        self._max_stale_seconds = max_stale_seconds
        self._sequencer = sequencer
        self._sequencer_grace_seconds = sequencer_grace_seconds

        logger.info(
            f"PriceValidator initialized: feeds={len(self.registry)}, "
            f"max_stale={max_stale_seconds}s, sequencer={sequencer!r}, "
            f"grace={sequencer_grace_seconds}s"
        )

    @property
    def config(self) -> EngineConfig:
        """Get a consistent snapshot of the current configuration."""
        with self._lock:
            return EngineConfig(
                feeds=self.registry.snapshot(),
                max_stale_seconds=self._max_stale_seconds,
                sequencer=self._sequencer,
                sequencer_grace_seconds=self._sequencer_grace_seconds,
            )

    def subscribe(self, listener: Listener) -> None:
        """Register a listener for configuration change events.

        :param listener: Callable receiving each event.
        """
        self.notifier.subscribe(listener)

    # Queries

    def get_price(self, asset: Hashable) -> int:
        """Get the validated price of ``asset`` scaled to PRICE_DECIMALS.

        :param asset: Asset identifier.
        :returns: Canonical price.
        :raises PriceFeedError: If any step of the pipeline fails.
        """
        return self.get_price_details(asset).price

    def get_price_details(self, asset: Hashable) -> ValidatedPrice:
        """Get the validated price of ``asset`` with its round metadata.

        :param asset: Asset identifier.
        :returns: ValidatedPrice.
        :raises PriceFeedError: If any step of the pipeline fails.
        """
        config = self.config
        now = self.now_fn()
        check_sequencer(config.sequencer, config.sequencer_grace_seconds, now)
        return self._read_validated(config, asset, now)

    def get_prices(self, assets: Sequence[Hashable]) -> list[int]:
        """Get validated prices for several assets, in input order.

        All-or-nothing: the first failing asset aborts the whole call with
        its own error and no prices are returned.

        :param assets: Asset identifiers.
        :returns: Canonical prices matching ``assets`` by position.
        :raises PriceFeedError: On the first failing asset.
        """
        if not assets:
            return []

        config = self.config
        now = self.now_fn()
        check_sequencer(config.sequencer, config.sequencer_grace_seconds, now)
        return [self._read_validated(config, asset, now).price for asset in assets]

    def is_price_valid(self, asset: Hashable) -> bool:
        """Check whether :meth:`get_price` would succeed for ``asset``.

        Never raises.

        :param asset: Asset identifier.
        :returns: True if a validated price is available.
        """
        try:
            self.get_price_details(asset)
        except Exception as e:
            logger.debug(f"Price for {asset!r} not valid: {type(e).__name__}: {e}")
            return False
        return True

    def get_source_of_asset(self, asset: Hashable) -> PriceSource | None:
        """Get the source configured for ``asset``, or None."""
        return self.registry.get_source(asset)

    def _read_validated(
        self, config: EngineConfig, asset: Hashable, now: int
    ) -> ValidatedPrice:
        source = config.source_of(asset)
        if source is None:
            raise FeedNotSetError(asset)

        round_data = source.latest_round_data()
        validate_round_data(round_data, config.max_stale_seconds, now, asset=asset)

        decimals = source.decimals()
        price = normalize_price(round_data.answer, decimals, PRICE_DECIMALS)
        logger.debug(
            f"{asset!r}: round {round_data.round_id} answer {round_data.answer} "
            f"({decimals} decimals) -> {price}"
        )
        return ValidatedPrice(
            asset=asset,
            price=price,
            round_id=round_data.round_id,
            updated_at=round_data.updated_at,
            source_decimals=decimals,
        )

    # Admin operations

    def set_source(
        self, caller: Hashable, asset: Hashable, source: PriceSource | None
    ) -> None:
        """Set or clear the source of one asset. See :meth:`FeedRegistry.set_source`."""
        self.registry.set_source(caller, asset, source)

    def set_sources(
        self,
        caller: Hashable,
        assets: Sequence[Hashable],
        sources: Sequence[PriceSource | None],
    ) -> None:
        """Set or clear several sources atomically. See :meth:`FeedRegistry.set_sources`."""
        self.registry.set_sources(caller, assets, sources)

    def set_max_stale_time(self, caller: Hashable, seconds: int) -> None:
        """Set the maximum tolerated reading age.

        :param caller: Identity performing the change.
        :param seconds: New maximum age, or 0 to disable staleness checks.
        :raises NotAuthorizedError: If ``caller`` is not an admin.
        :raises ValueError: If ``seconds`` is negative.
        """
        self._authorize(caller)
        _require_unsigned("max_stale_seconds", seconds)

        with self._lock:
            old = self._max_stale_seconds
            self._max_stale_seconds = seconds

        logger.info(f"Max stale time changed: {old}s -> {seconds}s")
        self.notifier.emit(MaxStaleTimeChanged(old_value=old, new_value=seconds))

    def set_sequencer_config(
        self, caller: Hashable, source: PriceSource | None, grace_seconds: int
    ) -> None:
        """Set the sequencer uptime source and grace period together.

        :param caller: Identity performing the change.
        :param source: Sequencer uptime source, or None to disable the gate.
        :param grace_seconds: Required sequencer uptime, or 0 for none.
        :raises NotAuthorizedError: If ``caller`` is not an admin.
        :raises ValueError: If ``grace_seconds`` is negative.
        :raises TypeError: If ``source`` is not a PriceSource or None.
        """
        self._authorize(caller)
        _require_unsigned("sequencer_grace_seconds", grace_seconds)
        require_source(source)

        with self._lock:
            self._sequencer = source
            self._sequencer_grace_seconds = grace_seconds

        logger.info(f"Sequencer config changed: source={source!r}, grace={grace_seconds}s")
        self.notifier.emit(
            SequencerConfigChanged(new_source=source, new_grace_seconds=grace_seconds)
        )

    def _authorize(self, caller: Hashable) -> None:
        if not self.access_control.is_authorized_admin(caller):
            raise NotAuthorizedError(caller)
