"""Shared fixtures."""

import os

os.environ.setdefault('MPLBACKEND', 'Agg')

import numpy as np
import pytest


@pytest.fixture()
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture()
def sample_rgb(rng) -> np.ndarray:
    """A few hundred random RGB triples plus the corners of the cube."""
    corners = np.array([[r, g, b] for r in (0, 255) for g in (0, 255) for b in (0, 255)])
    return np.vstack([corners, rng.integers(0, 256, size=(300, 3))])
