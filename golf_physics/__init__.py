"""
Golf Physics Core
Ball flight, bounce and roll-out simulation with shot scoring.
"""

from golf_physics.ball import (
    AIR_DENSITY,
    GRAVITY,
    REGULATION_BALL,
    BallProperties,
    ClubArchetype,
    SpinCharacteristics,
    ball_properties,
)
from golf_physics.ballistics import (
    GroundContact,
    KinematicState,
    advance,
    compute_net_force,
    integrate_step,
    launch_state,
    launch_velocity,
    resolve_ground_contact,
)
from golf_physics.config import (
    DEFAULT_CONFIG,
    SimulationConfig,
    load_simulation_config,
)
from golf_physics.evaluation import (
    ShotAnalysis,
    ShotComparison,
    analyze_shot,
    compare_to_ideal,
    efficiency,
    grade_for_rating,
    launch_angle,
    optimal_launch_angle,
)
from golf_physics.log import setup_logging
from golf_physics.shot import ShotAccuracy, ShotParameters, ShotResult
from golf_physics.simulator import ShotSimulator, estimate_range, simulate_shot

__all__ = [
    "AIR_DENSITY",
    "GRAVITY",
    "REGULATION_BALL",
    "BallProperties",
    "ClubArchetype",
    "SpinCharacteristics",
    "ball_properties",
    "GroundContact",
    "KinematicState",
    "advance",
    "compute_net_force",
    "integrate_step",
    "launch_state",
    "launch_velocity",
    "resolve_ground_contact",
    "DEFAULT_CONFIG",
    "SimulationConfig",
    "load_simulation_config",
    "ShotAnalysis",
    "ShotComparison",
    "analyze_shot",
    "compare_to_ideal",
    "efficiency",
    "grade_for_rating",
    "launch_angle",
    "optimal_launch_angle",
    "setup_logging",
    "ShotAccuracy",
    "ShotParameters",
    "ShotResult",
    "ShotSimulator",
    "estimate_range",
    "simulate_shot",
]
