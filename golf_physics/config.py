"""
Golf Physics Core: Simulation Configuration

Loads step size, time ceiling, default accuracy target and ball constants
from YAML. File values override the built-in defaults; explicit overrides
win over both.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import numpy as np
import yaml

from golf_physics.ball import REGULATION_BALL, BallProperties
from golf_physics.ballistics import DEFAULT_TIME_STEP
from golf_physics.shot import DEFAULT_TARGET

# ---------- Paths ----------
CONFIGS_DIR = Path(__file__).resolve().parent / "configs"
DEFAULT_CONFIG_PATH = CONFIGS_DIR / "simulation.yaml"

DEFAULT_SETTINGS = {
    "time_step": DEFAULT_TIME_STEP,
    "max_time": 15.0,
    "default_target": list(DEFAULT_TARGET),
    "ball": REGULATION_BALL.to_dict(),
}


@dataclass(frozen=True)
class SimulationConfig:
    """Settings shared by every run of a simulator."""
    time_step: float = DEFAULT_TIME_STEP
    max_time: float = 15.0
    default_target: tuple = DEFAULT_TARGET
    ball: BallProperties = field(default_factory=lambda: REGULATION_BALL)

    def __post_init__(self):
        if not self.time_step > 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if not self.max_time > 0.0:
            raise ValueError(f"max_time must be positive, got {self.max_time}")
        target = tuple(float(v) for v in self.default_target)
        if len(target) != 3:
            raise ValueError(f"default_target must have 3 components, got {self.default_target!r}")
        object.__setattr__(self, "default_target", target)

    @property
    def max_steps(self) -> int:
        """Number of integration steps that fit under the time ceiling."""
        return int(round(self.max_time / self.time_step))

    @property
    def default_target_vector(self) -> np.ndarray:
        return np.array(self.default_target, dtype=np.float64)

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        merged = {**DEFAULT_SETTINGS, **data}
        ball = {**DEFAULT_SETTINGS["ball"], **(merged.get("ball") or {})}
        return cls(
            time_step=float(merged["time_step"]),
            max_time=float(merged["max_time"]),
            default_target=tuple(merged["default_target"]),
            ball=BallProperties(**{k: float(v) for k, v in ball.items()}),
        )

    def to_dict(self) -> dict:
        return {
            "time_step": self.time_step,
            "max_time": self.max_time,
            "default_target": list(self.default_target),
            "ball": self.ball.to_dict(),
        }


DEFAULT_CONFIG = SimulationConfig()


def load_simulation_config(
    config_path: Optional[Path] = None,
    overrides: Optional[dict] = None,
) -> SimulationConfig:
    """Load simulation settings from YAML.

    Args:
        config_path: YAML file to read. Defaults to configs/simulation.yaml.
        overrides: Values applied on top of the file (same keys as the YAML;
            a `ball` mapping is merged key by key).

    Returns:
        A frozen SimulationConfig.

    Raises:
        ValueError: if the file is not a mapping or any value is invalid.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(data).__name__}")

    overrides = overrides or {}
    ball = {**(data.get("ball") or {}), **(overrides.get("ball") or {})}
    merged = {**data, **overrides, "ball": ball}

    unknown = set(merged) - set(DEFAULT_SETTINGS)
    if unknown:
        raise ValueError(f"Unknown simulation settings: {sorted(unknown)}")
    unknown_ball = set(ball) - set(DEFAULT_SETTINGS["ball"])
    if unknown_ball:
        raise ValueError(f"Unknown ball settings: {sorted(unknown_ball)}")

    return SimulationConfig.from_dict(merged)
