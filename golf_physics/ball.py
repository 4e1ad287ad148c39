"""
Golf Physics Core: Ball & Club Reference Data

Physical constants for a regulation golf ball and the fixed table of club
archetypes (loft, typical carry band, nominal spin) used to score shots.

Everything here is read-only reference data: the default ball is a frozen
dataclass and the club table is built once at import time.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Tuple

import numpy as np

# ---------- Constants ----------
GRAVITY = 9.81                # m/s²
AIR_DENSITY = 1.225           # kg/m³ (sea level)


# ---------- Data Classes ----------
@dataclass(frozen=True)
class BallProperties:
    """Physical properties of the ball."""
    mass: float = 0.0459                  # kg (regulation ball)
    radius: float = 0.02135               # m
    drag_coefficient: float = 0.47        # Cd (dimensionless)
    spin_lift_coefficient: float = 0.25   # Cl (dimensionless)
    restitution: float = 0.8              # fraction of vertical speed kept on bounce
    rolling_resistance: float = 0.02      # ground friction coefficient

    def __post_init__(self):
        for name in ("mass", "radius", "drag_coefficient", "spin_lift_coefficient"):
            value = getattr(self, name)
            if not value > 0.0:
                raise ValueError(f"{name} must be strictly positive, got {value}")
        for name in ("restitution", "rolling_resistance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    @property
    def cross_sectional_area(self) -> float:
        """Projected area of the ball (m²)."""
        return float(np.pi * self.radius ** 2)

    def to_dict(self) -> dict:
        return {
            "mass": self.mass,
            "radius": self.radius,
            "drag_coefficient": self.drag_coefficient,
            "spin_lift_coefficient": self.spin_lift_coefficient,
            "restitution": self.restitution,
            "rolling_resistance": self.rolling_resistance,
        }


REGULATION_BALL = BallProperties()


def ball_properties() -> BallProperties:
    """Return the shared regulation ball constants."""
    return REGULATION_BALL


@dataclass(frozen=True)
class SpinCharacteristics:
    """Nominal spin for a club, in rpm."""
    backspin: float
    sidespin: float


@dataclass(frozen=True)
class ClubProfile:
    loft: float                               # degrees
    typical_distance: Tuple[float, float]     # (min, max) meters
    nominal_spin: SpinCharacteristics


class ClubArchetype(str, Enum):
    """The 14 supported club archetypes, valued by display name."""
    DRIVER = "Driver"
    WOOD_3 = "3 Wood"
    WOOD_5 = "5 Wood"
    IRON_3 = "3 Iron"
    IRON_4 = "4 Iron"
    IRON_5 = "5 Iron"
    IRON_6 = "6 Iron"
    IRON_7 = "7 Iron"
    IRON_8 = "8 Iron"
    IRON_9 = "9 Iron"
    PITCHING_WEDGE = "Pitching Wedge"
    SAND_WEDGE = "Sand Wedge"
    LOB_WEDGE = "Lob Wedge"
    PUTTER = "Putter"

    @classmethod
    def from_name(cls, value) -> "ClubArchetype":
        """Resolve a club from its display name ("7 Iron") or member name ("IRON_7")."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for club in cls:
            if key in (club.value.lower(), club.name.lower()):
                return club
        raise ValueError(f"Unknown club archetype: {value!r}")

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def profile(self) -> ClubProfile:
        return CLUB_TABLE[self]

    @property
    def loft(self) -> float:
        """Typical loft angle in degrees."""
        return self.profile.loft

    @property
    def typical_distance(self) -> Tuple[float, float]:
        """Typical carry band (min, max) in meters."""
        return self.profile.typical_distance

    @property
    def nominal_spin(self) -> SpinCharacteristics:
        return self.profile.nominal_spin

    @property
    def ideal_distance(self) -> float:
        """Midpoint of the typical carry band."""
        low, high = self.typical_distance
        return low + (high - low) * 0.5

    @property
    def ideal_launch_angle(self) -> float:
        """Rough ideal launch angle (degrees) for this club."""
        return self.loft * 0.7


# Spin groups shared across neighbouring clubs
_DRIVER_SPIN = SpinCharacteristics(backspin=2500, sidespin=300)
_WOOD_SPIN = SpinCharacteristics(backspin=3500, sidespin=400)
_LONG_IRON_SPIN = SpinCharacteristics(backspin=4500, sidespin=500)
_MID_IRON_SPIN = SpinCharacteristics(backspin=6000, sidespin=600)
_SHORT_IRON_SPIN = SpinCharacteristics(backspin=7500, sidespin=700)
_WEDGE_SPIN = SpinCharacteristics(backspin=9000, sidespin=800)
_LOB_SPIN = SpinCharacteristics(backspin=10000, sidespin=900)
_PUTTER_SPIN = SpinCharacteristics(backspin=100, sidespin=50)

CLUB_TABLE = MappingProxyType({
    ClubArchetype.DRIVER:         ClubProfile(10.5, (200.0, 280.0), _DRIVER_SPIN),
    ClubArchetype.WOOD_3:         ClubProfile(15.0, (180.0, 230.0), _WOOD_SPIN),
    ClubArchetype.WOOD_5:         ClubProfile(18.0, (160.0, 210.0), _WOOD_SPIN),
    ClubArchetype.IRON_3:         ClubProfile(20.0, (150.0, 190.0), _LONG_IRON_SPIN),
    ClubArchetype.IRON_4:         ClubProfile(24.0, (140.0, 175.0), _LONG_IRON_SPIN),
    ClubArchetype.IRON_5:         ClubProfile(27.0, (130.0, 160.0), _LONG_IRON_SPIN),
    ClubArchetype.IRON_6:         ClubProfile(31.0, (120.0, 145.0), _MID_IRON_SPIN),
    ClubArchetype.IRON_7:         ClubProfile(35.0, (110.0, 130.0), _MID_IRON_SPIN),
    ClubArchetype.IRON_8:         ClubProfile(39.0, (100.0, 115.0), _SHORT_IRON_SPIN),
    ClubArchetype.IRON_9:         ClubProfile(43.0, (85.0, 105.0), _SHORT_IRON_SPIN),
    ClubArchetype.PITCHING_WEDGE: ClubProfile(47.0, (70.0, 90.0), _WEDGE_SPIN),
    ClubArchetype.SAND_WEDGE:     ClubProfile(56.0, (50.0, 70.0), _WEDGE_SPIN),
    ClubArchetype.LOB_WEDGE:      ClubProfile(60.0, (30.0, 50.0), _LOB_SPIN),
    ClubArchetype.PUTTER:         ClubProfile(4.0, (0.0, 30.0), _PUTTER_SPIN),
})

CLUB_ARCHETYPES = list(ClubArchetype)
