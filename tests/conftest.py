"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from holdem.game.cards import parse_cards


@pytest.fixture
def rng():
    """Seeded generator so shuffles and simulations are reproducible."""
    return np.random.default_rng(20240601)


@pytest.fixture
def cards():
    """Parse a card string like 'As Kh Td'."""
    return parse_cards
