"""Shared fixtures for feedguard tests."""

from __future__ import annotations

import pytest

from feedguard.src.AccessControl import StaticAccessControl
from feedguard.src.PriceValidator import PriceValidator
from feedguard.tests.helpers import ADMIN, NOW


@pytest.fixture
def access_control() -> StaticAccessControl:
    """Access control with a single admin."""
    return StaticAccessControl([ADMIN])


@pytest.fixture
def clock() -> list[int]:
    """Mutable clock; tests move time by assigning clock[0]."""
    return [NOW]


@pytest.fixture
def validator(access_control, clock) -> PriceValidator:
    """Validator with no feeds and a controllable clock."""
    return PriceValidator(access_control, now_fn=lambda: clock[0])
