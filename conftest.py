"""Shared pytest fixtures."""

import numpy as np
import pytest


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(7)


@pytest.fixture(scope="module")
def uniform_samples() -> np.ndarray:
    return np.random.default_rng(42).random(50_000)


@pytest.fixture(scope="module")
def normal_samples() -> np.ndarray:
    return np.random.default_rng(42).standard_normal(1_000_000)
