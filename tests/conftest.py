"""
Test fixtures and configuration for pytest.
"""

import logging

import pytest

from rsacompare import PubKey, generate_toy_key


@pytest.fixture
def log() -> logging.Logger:
    """Logger handed to Attack.run."""
    return logging.getLogger("rsacompare.tests")


@pytest.fixture
def textbook_key() -> PubKey:
    """n = 11 * 17, e = 7 (phi = 160, d = 23)."""
    return PubKey(n=187, e=7, label="textbook")


@pytest.fixture
def toy_keys() -> list:
    """A few random keys built from 8-bit primes, small enough to brute force."""
    return [generate_toy_key(8, e=17) for _ in range(3)]
