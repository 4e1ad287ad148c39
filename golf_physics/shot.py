"""
Golf Physics Core: Shot Records

Immutable input (ShotParameters) and output (ShotResult) of a shot
simulation, plus the accuracy measure against a target.

Both sides flatten to JSON-native records for shot history storage.
"""

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Tuple

import numpy as np

from golf_physics.ball import ClubArchetype
from golf_physics.ballistics import GroundContact

DEFAULT_TARGET = (100.0, 0.0, 0.0)
ACCURACY_ERROR_SCALE = 50.0   # meters of total error that drive accuracy to 0


def _as_vector(value, name: str) -> np.ndarray:
    vec = np.array(value, dtype=np.float64).reshape(-1)
    if vec.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vec.shape}")
    vec.flags.writeable = False
    return vec


def _flatten(prefix: str, vec: Optional[np.ndarray]) -> dict:
    if vec is None:
        return {f"{prefix}_x": None, f"{prefix}_y": None, f"{prefix}_z": None}
    return {f"{prefix}_x": float(vec[0]), f"{prefix}_y": float(vec[1]), f"{prefix}_z": float(vec[2])}


def _unflatten(record: dict, prefix: str) -> Optional[Tuple[float, float, float]]:
    values = tuple(record.get(f"{prefix}_{axis}") for axis in "xyz")
    if any(v is None for v in values):
        return None
    return values


# ---------- Inputs ----------
@dataclass(frozen=True, eq=False)
class ShotParameters:
    """Launch conditions for one shot. Never mutated after construction."""
    initial_position: np.ndarray
    initial_velocity: np.ndarray
    spin: np.ndarray = field(default_factory=lambda: np.zeros(3))
    club: ClubArchetype = ClubArchetype.DRIVER
    wind: np.ndarray = field(default_factory=lambda: np.zeros(3))
    target: Optional[np.ndarray] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "initial_position", _as_vector(self.initial_position, "initial_position"))
        object.__setattr__(self, "initial_velocity", _as_vector(self.initial_velocity, "initial_velocity"))
        object.__setattr__(self, "spin", _as_vector(self.spin, "spin"))
        object.__setattr__(self, "wind", _as_vector(self.wind, "wind"))
        if self.target is not None:
            object.__setattr__(self, "target", _as_vector(self.target, "target"))
        object.__setattr__(self, "club", ClubArchetype.from_name(self.club))

    @property
    def ball_speed(self) -> float:
        return float(np.linalg.norm(self.initial_velocity))

    @property
    def spin_rate(self) -> float:
        return float(np.linalg.norm(self.spin))

    def to_record(self) -> dict:
        """Flat, JSON-native representation."""
        record = {
            "id": self.id,
            "timestamp": self.timestamp.isoformat(),
            "club": self.club.value,
        }
        record.update(_flatten("initial_position", self.initial_position))
        record.update(_flatten("initial_velocity", self.initial_velocity))
        record.update(_flatten("spin", self.spin))
        record.update(_flatten("wind", self.wind))
        record.update(_flatten("target", self.target))
        return record

    @classmethod
    def from_record(cls, record: dict) -> "ShotParameters":
        """Rebuild parameters (same id and timestamp) from to_record() output."""
        return cls(
            initial_position=_unflatten(record, "initial_position"),
            initial_velocity=_unflatten(record, "initial_velocity"),
            spin=_unflatten(record, "spin") or (0.0, 0.0, 0.0),
            club=record["club"],
            wind=_unflatten(record, "wind") or (0.0, 0.0, 0.0),
            target=_unflatten(record, "target"),
            id=record["id"],
            timestamp=datetime.fromisoformat(record["timestamp"]),
        )


# ---------- Accuracy ----------
@dataclass(frozen=True)
class ShotAccuracy:
    """How close a ball finished to a target."""
    target_distance: float
    actual_distance: float
    lateral_deviation: float
    accuracy: float               # 0.0 to 1.0

    @classmethod
    def measure(cls, target: np.ndarray, actual: np.ndarray) -> "ShotAccuracy":
        """Score `actual` against `target`.

        Distances are measured from the frame origin; the lateral term is
        the x-offset. Accuracy falls linearly to 0 at 50 m of total error.
        """
        target = np.asarray(target, dtype=np.float64)
        actual = np.asarray(actual, dtype=np.float64)
        target_distance = float(np.linalg.norm(target))
        actual_distance = float(np.linalg.norm(actual))
        lateral = float(abs(actual[0] - target[0]))
        total_error = float(np.hypot(actual_distance - target_distance, lateral))
        return cls(
            target_distance=target_distance,
            actual_distance=actual_distance,
            lateral_deviation=lateral,
            accuracy=max(0.0, 1.0 - total_error / ACCURACY_ERROR_SCALE),
        )

    def to_dict(self) -> dict:
        return {
            "target_distance": self.target_distance,
            "actual_distance": self.actual_distance,
            "lateral_deviation": self.lateral_deviation,
            "accuracy": self.accuracy,
        }


# ---------- Outputs ----------
@dataclass(frozen=True, eq=False)
class ShotResult:
    """Everything one simulation run produced.

    `trajectory` holds one position sample per integration step plus the
    final resting sample. The landing fields describe the first ground
    contact (carry); the rest/total fields include bounce and roll-out.
    """
    parameters: ShotParameters
    trajectory: np.ndarray                  # (n, 3)
    landing_position: Optional[np.ndarray]
    landing_index: Optional[int]
    rest_position: np.ndarray
    distance: float                         # carry, launch -> landing (xz)
    total_distance: float                   # launch -> rest (xz)
    flight_time: float                      # s until first ground contact
    total_time: float                       # s until stop or time ceiling
    max_height: float                       # above launch height
    apex_index: int
    accuracy: ShotAccuracy
    contacts: Tuple[GroundContact, ...] = ()
    stopped: bool = False

    @property
    def club(self) -> ClubArchetype:
        return self.parameters.club

    @property
    def bounce_count(self) -> int:
        return len(self.contacts)

    def to_record(self) -> dict:
        """Flat, JSON-native summary (trajectory excluded) for shot history."""
        record = self.parameters.to_record()
        record.update(_flatten("landing_position", self.landing_position))
        record.update(_flatten("rest_position", self.rest_position))
        record.update({
            "distance": self.distance,
            "total_distance": self.total_distance,
            "flight_time": self.flight_time,
            "total_time": self.total_time,
            "max_height": self.max_height,
            "accuracy": self.accuracy.accuracy,
            "lateral_deviation": self.accuracy.lateral_deviation,
            "bounce_count": self.bounce_count,
            "stopped": self.stopped,
            "sample_count": int(len(self.trajectory)),
        })
        return record

    def to_dict(self) -> dict:
        """JSON-serializable representation including the trajectory."""
        return {
            "parameters": self.parameters.to_record(),
            "trajectory": self.trajectory.tolist(),
            "landing_position": None if self.landing_position is None else self.landing_position.tolist(),
            "landing_index": self.landing_index,
            "rest_position": self.rest_position.tolist(),
            "distance": self.distance,
            "total_distance": self.total_distance,
            "flight_time": self.flight_time,
            "total_time": self.total_time,
            "max_height": self.max_height,
            "apex_index": self.apex_index,
            "accuracy": self.accuracy.to_dict(),
            "contacts": [c.to_dict() for c in self.contacts],
            "stopped": self.stopped,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
