"""Shared fixtures for complex arithmetic tests."""

from __future__ import annotations

import math
import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from complex_value import Polar, Rectangular


@pytest.fixture
def three_four() -> Rectangular:
    """3 + 4i, modulus exactly 5."""
    return Rectangular(3, 4)


@pytest.fixture
def unit_i_polar() -> Polar:
    return Polar(1, math.pi / 2)


@pytest.fixture
def unnormalized_polar() -> Polar:
    """Negative stored modulus and an angle several turns out."""
    return Polar(-2, 7.0)
