"""
Golf Physics Core: Shot Simulator

Runs one shot from launch to rest (or the time ceiling) with the fixed-step
ballistics in golf_physics.ballistics and packs the outcome into a
ShotResult.

Each run owns its KinematicState and trajectory buffer; the only shared data
is the frozen ball constants and club table, so independent shots can be
simulated on separate threads.
"""

import logging
from typing import Iterable, List, Optional

import numpy as np

from golf_physics.ball import BallProperties
from golf_physics.ballistics import (
    KinematicState,
    advance,
    horizontal_distance,
    launch_velocity,
)
from golf_physics.config import DEFAULT_CONFIG, SimulationConfig
from golf_physics.shot import ShotAccuracy, ShotParameters, ShotResult

logger = logging.getLogger(__name__)


def simulate_shot(
    parameters: ShotParameters,
    ball: Optional[BallProperties] = None,
    config: Optional[SimulationConfig] = None,
) -> ShotResult:
    """Simulate a shot through flight, bounces and roll-out.

    Args:
        parameters: Launch conditions.
        ball: Ball constants. Defaults to the config's ball.
        config: Step size, time ceiling and default target.

    Returns:
        ShotResult. Carry distance and flight time are measured at the first
        ground contact; total distance and time at rest (or the ceiling).
        Never raises on numeric input: a zero-velocity shot just stops on
        the first contact.
        Accuracy is measured at the landing point when a target is given;
        without one the default target is measured against (0, 0, 0).
    """
    config = config or DEFAULT_CONFIG
    ball = ball or config.ball
    dt = config.time_step
    origin = parameters.initial_position

    state = KinematicState(
        position=origin,
        velocity=parameters.initial_velocity,
        angular_velocity=parameters.spin,
        in_flight=True,
        time_step=dt,
    )

    samples: List[np.ndarray] = []
    contacts = []
    max_y = float(origin[1])
    apex_index = 0
    landing_position = None
    landing_index = None
    landing_step = None
    steps = 0

    while state.in_flight and steps < config.max_steps:
        samples.append(state.position.copy())
        if state.position[1] > max_y:
            max_y = float(state.position[1])
            apex_index = len(samples) - 1

        contact = advance(state, parameters.wind, ball)
        steps += 1

        if contact is not None:
            contacts.append(contact)
            if landing_position is None:
                landing_position = contact.position
                # the clamped position is the next sample
                landing_index = len(samples)
                landing_step = steps

    # resting (or ceiling) sample
    samples.append(state.position.copy())
    if state.position[1] > max_y:
        max_y = float(state.position[1])
        apex_index = len(samples) - 1

    trajectory = np.array(samples, dtype=np.float64)
    trajectory.flags.writeable = False
    rest_position = trajectory[-1]

    total_time = min(steps * dt, config.max_time)
    flight_time = total_time if landing_step is None else min(landing_step * dt, config.max_time)

    carry_point = rest_position if landing_position is None else landing_position
    distance = horizontal_distance(carry_point, origin)

    if parameters.target is not None:
        accuracy = ShotAccuracy.measure(parameters.target, carry_point)
    else:
        # untargeted shots are scored at the frame origin, not the landing point
        accuracy = ShotAccuracy.measure(config.default_target_vector, np.zeros(3))

    if state.in_flight:
        logger.warning(
            "Shot %s hit the %.1fs ceiling while still moving (%d steps)",
            parameters.id, config.max_time, steps,
        )
    logger.debug(
        "Shot %s (%s): %d steps, carry %.2fm, flight %.2fs, %d contacts",
        parameters.id, parameters.club.value, steps, distance, flight_time, len(contacts),
    )

    return ShotResult(
        parameters=parameters,
        trajectory=trajectory,
        landing_position=landing_position,
        landing_index=landing_index,
        rest_position=rest_position,
        distance=distance,
        total_distance=horizontal_distance(rest_position, origin),
        flight_time=flight_time,
        total_time=total_time,
        max_height=max_y - float(origin[1]),
        apex_index=apex_index,
        accuracy=accuracy,
        contacts=tuple(contacts),
        stopped=not state.in_flight,
    )


class ShotSimulator:
    """Simulates shots with a fixed ball and configuration."""

    def __init__(self, ball: Optional[BallProperties] = None, config: Optional[SimulationConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.ball = ball or self.config.ball

    def simulate(self, parameters: ShotParameters) -> ShotResult:
        return simulate_shot(parameters, ball=self.ball, config=self.config)

    def simulate_many(self, shots: Iterable[ShotParameters]) -> List[ShotResult]:
        """Simulate independent shots in order."""
        return [self.simulate(p) for p in shots]


def estimate_range(
    speed: float,
    angle: float,
    wind: Optional[np.ndarray] = None,
    ball: Optional[BallProperties] = None,
    config: Optional[SimulationConfig] = None,
) -> float:
    """Downrange x where a ball fired from the origin first touches down.

    Args:
        speed: Launch speed in m/s.
        angle: Launch angle in radians, fired along +x.
        wind: Optional wind vector (m/s).
    """
    config = config or DEFAULT_CONFIG
    ball = ball or config.ball
    state = KinematicState(velocity=launch_velocity(speed, angle), time_step=config.time_step)
    for _ in range(config.max_steps):
        if advance(state, wind, ball) is not None or not state.in_flight:
            break
    return float(state.position[0])


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console
    from rich.table import Table

    from golf_physics.ball import ClubArchetype

    console = Console()
    console.print("\n[bold cyan]=== Shot Simulator Smoke Test ===[/bold cyan]\n")

    console.print("[bold]Test 1:[/bold] 45° at 20 m/s, no spin, no wind")
    params = ShotParameters(
        initial_position=np.zeros(3),
        initial_velocity=np.array([14.14, 14.14, 0.0]),
        club=ClubArchetype.DRIVER,
    )
    result = simulate_shot(params)

    table = Table(title="Trajectory (sampled every 0.5s)")
    table.add_column("Time (s)", style="cyan")
    table.add_column("Position (x, y, z)", style="green")
    for i, pos in enumerate(result.trajectory):
        if i % 30 == 0 or i == len(result.trajectory) - 1:
            table.add_row(f"{i / 60.0:.2f}", f"({pos[0]:.1f}, {pos[1]:.1f}, {pos[2]:.1f})")
    console.print(table)

    vacuum = 20.0**2 / 9.81
    console.print(f"  Carry: {result.distance:.1f}m (vacuum {vacuum:.1f}m), flight {result.flight_time:.2f}s")
    console.print(f"  Total: {result.total_distance:.1f}m after {result.bounce_count} contacts")
    assert result.distance < vacuum, "Drag should shorten the carry"
    assert 2.0 <= result.flight_time <= 4.0

    console.print("\n[bold]Test 2:[/bold] Zero velocity")
    still = simulate_shot(ShotParameters(initial_position=np.zeros(3), initial_velocity=np.zeros(3)))
    assert still.stopped and still.distance < 1e-9 and len(still.trajectory) <= 2
    console.print("  Stopped on first contact")

    console.print("\n[bold]Test 3:[/bold] Launch angle sweep")
    best_angle, best_range = 0, 0.0
    for deg in range(10, 80, 5):
        r = estimate_range(20.0, np.radians(deg))
        if r > best_range:
            best_angle, best_range = deg, r
    console.print(f"  Best angle: {best_angle}° -> {best_range:.1f}m")

    console.print("\n[bold green]All simulator checks passed![/bold green]\n")
