"""
Global pytest fixtures for the stopplacer tests.

- Provides deterministic seeding across Python, NumPy, and PyTorch.
- Forces single-threaded torch to keep float reductions reproducible.
- Standardizes on CPU and a non-interactive matplotlib backend.
"""

from __future__ import annotations

import os
import random
import sys
from typing import Generator, List
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
import torch

# Add the project's src directory to the Python path so tests can import the code
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))
# Helper modules (utils, data_gen) live next to this file
sys.path.insert(0, str(Path(__file__).resolve().parent))

from stopplacer import Point  # noqa: E402


def _get_seed() -> int:
    """Resolve the test seed from env or default."""
    env = os.getenv("TEST_RANDOM_SEED", "1337")
    try:
        return int(env)
    except ValueError:
        return 1337


@pytest.fixture(scope="session", autouse=True)
def seed_all() -> int:
    """
    Seed Python, NumPy, and PyTorch RNGs once per session.

    Seed value comes from TEST_RANDOM_SEED (default 1337).
    """
    seed = _get_seed()
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)
    return seed


@pytest.fixture(scope="session", autouse=True)
def set_torch_threads() -> None:
    """
    Reduce PyTorch to a single thread for stability and consistent timing.
    """
    torch.set_num_threads(1)


@pytest.fixture(scope="function")
def rng(seed_all: int) -> Generator[np.random.Generator, None, None]:
    """
    Per-test NumPy Generator seeded from the session seed.
    """
    yield np.random.default_rng(seed_all)


@pytest.fixture(scope="session")
def torch_device() -> torch.device:
    """
    Standard device for tests, pinned to CPU.
    """
    return torch.device("cpu")


@pytest.fixture
def abcd_points() -> List[Point]:
    """A(0,0), B(1,0), C(0,1), D(10,10): three close homes and one far away."""
    return [
        Point("A", 0.0, 0.0),
        Point("B", 1.0, 0.0),
        Point("C", 0.0, 1.0),
        Point("D", 10.0, 10.0),
    ]
