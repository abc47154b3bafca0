"""
Shared fixtures: reference metrics, inference results and synthetic images.

Usage:
    pytest tests/            # all tests
    pytest tests/ -k mamdani # engine only
"""
import numpy as np
import pytest

from fuzzy.mamdani import mamdani_infer
from fuzzy.results import Metrics


@pytest.fixture
def balanced_metrics():
    # exact apexes / plateau of Normal, Medium and Clean
    return Metrics(brightness=127.0, contrast=50.0, sharpness=70.0, noise=10.0)


@pytest.fixture
def dark_flat_metrics():
    return Metrics(brightness=20.0, contrast=10.0, sharpness=20.0, noise=5.0)


@pytest.fixture
def balanced_result(balanced_metrics):
    return mamdani_infer(balanced_metrics)


@pytest.fixture
def gray_image():
    return np.full((24, 32, 3), 100, dtype=np.uint8)


@pytest.fixture
def checkerboard():
    yy, xx = np.mgrid[0:16, 0:16]
    board = np.where((yy + xx) % 2 == 0, 255, 0).astype(np.uint8)
    return np.dstack([board, board, board])


@pytest.fixture
def dark_noisy_image():
    rng = np.random.default_rng(7)
    base = np.full((48, 64, 3), 30.0)
    noise = rng.normal(0.0, 12.0, size=base.shape)
    return np.clip(base + noise, 0, 255).astype(np.uint8)
