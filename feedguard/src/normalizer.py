"""Decimal rescaling of raw source values to the canonical precision.

Scaling down truncates: digits below the canonical precision are dropped,
never rounded. Results must fit an unsigned 256-bit integer.

.. code-block:: python

    >>> normalize_price(50_000 * 10**18, 18)
    5000000000000
    >>> normalize_price(1_000_000, 6)
    100000000
    >>> normalize_price(123_456_789_999, 10)
    1234567899
"""

from __future__ import annotations

from .errors import PriceOverflowError

# Number of decimals every returned price is expressed in.
PRICE_DECIMALS = 8

MAX_UINT256 = 2**256 - 1


def normalize_price(
    raw_value: int,
    source_decimals: int,
    target_decimals: int = PRICE_DECIMALS,
) -> int:
    """Rescale a raw value from ``source_decimals`` to ``target_decimals``.

    :param raw_value: Validated, non-negative raw value from the source.
    :param source_decimals: Native decimals of the source.
    :param target_decimals: Decimals of the result (default: 8).
    :returns: Value expressed in ``target_decimals``.
    :raises ValueError: If the value or either decimals count is negative.
    :raises PriceOverflowError: If the result exceeds ``MAX_UINT256``.
    """
    if raw_value < 0:
        raise ValueError(f"raw_value must be non-negative, got {raw_value}")
    if source_decimals < 0 or target_decimals < 0:
        raise ValueError(
            f"decimals must be non-negative, got {source_decimals} -> {target_decimals}"
        )

    if source_decimals == target_decimals:
        scaled = raw_value
    elif source_decimals > target_decimals:
        scaled = raw_value // 10 ** (source_decimals - target_decimals)
    else:
        scaled = raw_value * 10 ** (target_decimals - source_decimals)

    if scaled > MAX_UINT256:
        raise PriceOverflowError(raw_value, source_decimals)
    return scaled
