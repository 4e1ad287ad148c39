"""
Golf Physics Test Suite: Shared Fixtures

Provides reusable pytest fixtures for all test stages.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from golf_physics.ball import REGULATION_BALL, ClubArchetype
from golf_physics.config import DEFAULT_CONFIG
from golf_physics.shot import ShotParameters
from golf_physics.simulator import ShotSimulator


# ---------- Ball & Config Fixtures ----------
@pytest.fixture
def ball():
    """Regulation ball constants."""
    return REGULATION_BALL


@pytest.fixture
def config():
    """Default simulation settings (1/60 s step, 15 s ceiling)."""
    return DEFAULT_CONFIG


@pytest.fixture
def simulator():
    return ShotSimulator()


# ---------- Shot Fixtures ----------
@pytest.fixture
def scenario_a():
    """45° at ~20 m/s, no spin, no wind, Driver, no target."""
    return ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.array([14.14, 14.14, 0.0]),
        club=ClubArchetype.DRIVER,
    )


@pytest.fixture
def scenario_b():
    """Scenario A with a 5 m/s tailwind along the flight axis."""
    return ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.array([14.14, 14.14, 0.0]),
        club=ClubArchetype.DRIVER,
        wind=np.array([5.0, 0.0, 0.0]),
    )


@pytest.fixture
def putt():
    """Putter rolling along the ground at 3 m/s."""
    return ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.array([3.0, 0.0, 0.0]),
        club=ClubArchetype.PUTTER,
    )


@pytest.fixture
def zero_shot():
    """Ball that is never struck."""
    return ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.zeros(3),
        club=ClubArchetype.DRIVER,
    )


@pytest.fixture
def spin_shot():
    """Low 7-iron with moderate backspin about +z (lift for +x flight)."""
    return ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.array([25.0, 8.0, 0.0]),
        spin=np.array([0.0, 0.0, 3.0]),
        club=ClubArchetype.IRON_7,
    )
