"""
Golf Physics Core: Ball Flight Ballistics

Force model, fixed-step integrator and ground contact resolution for a single
spinning ball over the flat ground plane y = 0.

Coordinate system: x=downrange, y=up, z=lateral
All units SI: meters, seconds, kg. Spin is an rpm-scale vector used directly
in the Magnus cross product.

Integration is semi-implicit Euler (velocity first, then position) with a
fixed step, so identical inputs always give identical trajectories.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from golf_physics.ball import AIR_DENSITY, GRAVITY, REGULATION_BALL, BallProperties

# ---------- Constants ----------
DEFAULT_TIME_STEP = 1.0 / 60.0    # s
MIN_AERO_SPEED = 0.01             # m/s, below this drag and lift are zero
MIN_MAGNUS_MAGNITUDE = 0.001      # |spin x v_rel| below this gives no lift
STOP_SPEED = 0.1                  # m/s, horizontal speed at which the ball stops
SPIN_DECAY_PER_FRAME = 0.99       # per 1/60 s of flight
BOUNCE_SPIN_DAMPING = 0.8


# ---------- Data Classes ----------
@dataclass
class KinematicState:
    """Mutable ball state, owned by a single simulation run."""
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    angular_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    in_flight: bool = True
    time_step: float = DEFAULT_TIME_STEP

    def __post_init__(self):
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)
        self.angular_velocity = np.array(self.angular_velocity, dtype=np.float64)

    @property
    def horizontal_speed(self) -> float:
        return float(np.hypot(self.velocity[0], self.velocity[2]))

    def copy(self) -> "KinematicState":
        return KinematicState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            angular_velocity=self.angular_velocity.copy(),
            in_flight=self.in_flight,
            time_step=self.time_step,
        )


@dataclass(frozen=True, eq=False)
class GroundContact:
    """One resolved ground contact."""
    position: np.ndarray              # after clamping to the ball radius
    incoming_vertical_speed: float    # velocity.y before the bounce
    outgoing_vertical_speed: float    # velocity.y after restitution
    horizontal_speed: float           # before rolling friction
    stopped: bool

    def to_dict(self) -> dict:
        return {
            "position": self.position.tolist(),
            "incoming_vertical_speed": self.incoming_vertical_speed,
            "outgoing_vertical_speed": self.outgoing_vertical_speed,
            "horizontal_speed": self.horizontal_speed,
            "stopped": self.stopped,
        }


# ---------- Force Model ----------
def _drag_force(relative_velocity: np.ndarray, speed: float, ball: BallProperties) -> np.ndarray:
    """F_d = -0.5 * rho * Cd * A * |v|² * v_hat"""
    magnitude = 0.5 * AIR_DENSITY * ball.drag_coefficient * ball.cross_sectional_area * speed**2
    return -(relative_velocity / speed) * magnitude


def _magnus_force(relative_velocity: np.ndarray, angular_velocity: np.ndarray,
                  ball: BallProperties) -> np.ndarray:
    """F_m = 0.5 * rho * Cl * A * |w x v| along (w x v)_hat, zero when |w x v| is tiny."""
    magnus = np.cross(angular_velocity, relative_velocity)
    magnus_len = np.linalg.norm(magnus)
    if magnus_len > MIN_MAGNUS_MAGNITUDE:
        magnitude = 0.5 * AIR_DENSITY * ball.spin_lift_coefficient * ball.cross_sectional_area * magnus_len
        return (magnus / magnus_len) * magnitude
    return np.zeros(3)


def compute_net_force(
    state: KinematicState,
    wind: Optional[np.ndarray] = None,
    ball: BallProperties = REGULATION_BALL,
) -> np.ndarray:
    """Compute the total force on the ball at a given state.

    Forces:
      - Gravity:  F_g = [0, -m*g, 0]
      - Air drag: opposes the velocity relative to the wind
      - Magnus:   along (spin x v_rel), from backspin and sidespin

    Drag and lift are both zero when the relative speed is at or below
    0.01 m/s.
    """
    force = np.array([0.0, -ball.mass * GRAVITY, 0.0])

    relative_velocity = state.velocity if wind is None else state.velocity - wind
    speed = np.linalg.norm(relative_velocity)
    if speed > MIN_AERO_SPEED:
        force += _drag_force(relative_velocity, speed, ball)
        force += _magnus_force(relative_velocity, state.angular_velocity, ball)

    return force


# ---------- Integrator ----------
def integrate_step(
    state: KinematicState,
    net_force: np.ndarray,
    ball: BallProperties = REGULATION_BALL,
) -> None:
    """Advance velocity then position by one fixed step (in place)."""
    dt = state.time_step
    state.velocity = state.velocity + (net_force / ball.mass) * dt
    state.position = state.position + state.velocity * dt


def decay_spin(state: KinematicState) -> None:
    """Bleed off spin to air resistance: w *= 0.99^(dt*60)."""
    state.angular_velocity = state.angular_velocity * SPIN_DECAY_PER_FRAME ** (state.time_step * 60.0)


# ---------- Ground Contact ----------
def resolve_ground_contact(
    state: KinematicState,
    ball: BallProperties = REGULATION_BALL,
) -> GroundContact:
    """Resolve a ground contact in place and return what happened.

    Clamps the ball onto its radius, reflects vertical velocity with
    restitution, applies one step of rolling friction to the horizontal
    velocity and damps spin. A horizontal speed at or below 0.1 m/s stops
    the ball for good.
    """
    state.position[1] = ball.radius

    incoming = float(state.velocity[1])
    state.velocity[1] = -incoming * ball.restitution

    horizontal_speed = state.horizontal_speed
    if horizontal_speed > STOP_SPEED:
        deceleration = ball.rolling_resistance * GRAVITY
        new_speed = max(0.0, horizontal_speed - deceleration * state.time_step)
        ratio = new_speed / horizontal_speed
        state.velocity[0] *= ratio
        state.velocity[2] *= ratio
    else:
        state.velocity[0] = 0.0
        state.velocity[2] = 0.0
        state.in_flight = False

    state.angular_velocity = state.angular_velocity * BOUNCE_SPIN_DAMPING

    position = state.position.copy()
    position.flags.writeable = False
    return GroundContact(
        position=position,
        incoming_vertical_speed=incoming,
        outgoing_vertical_speed=float(state.velocity[1]),
        horizontal_speed=horizontal_speed,
        stopped=not state.in_flight,
    )


def advance(
    state: KinematicState,
    wind: Optional[np.ndarray] = None,
    ball: BallProperties = REGULATION_BALL,
) -> Optional[GroundContact]:
    """Run one full physics update. Returns the ground contact, if any.

    A stopped ball is left untouched.
    """
    if not state.in_flight:
        return None

    force = compute_net_force(state, wind, ball)
    integrate_step(state, force, ball)

    contact = None
    if state.position[1] <= ball.radius:
        contact = resolve_ground_contact(state, ball)

    decay_spin(state)
    return contact


# ---------- Launch Helpers ----------
def launch_state(
    origin: np.ndarray,
    impulse: np.ndarray,
    spin: Optional[np.ndarray] = None,
    ball: BallProperties = REGULATION_BALL,
    time_step: float = DEFAULT_TIME_STEP,
) -> KinematicState:
    """Build an in-flight state from a strike impulse (N·s): v = J / m."""
    return KinematicState(
        position=origin,
        velocity=np.asarray(impulse, dtype=np.float64) / ball.mass,
        angular_velocity=np.zeros(3) if spin is None else spin,
        in_flight=True,
        time_step=time_step,
    )


def launch_velocity(speed: float, launch_angle: float, azimuth: float = 0.0) -> np.ndarray:
    """Convert speed and angles (radians) into a velocity vector.

    Args:
        speed: Ball speed in m/s.
        launch_angle: Elevation above the ground plane. Positive = up.
        azimuth: Horizontal angle from +x toward +z.

    Returns:
        3D velocity vector [vx, vy, vz].
    """
    horizontal = speed * np.cos(launch_angle)
    return np.array([
        horizontal * np.cos(azimuth),
        speed * np.sin(launch_angle),
        horizontal * np.sin(azimuth),
    ], dtype=np.float64)


def horizontal_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Distance between two points in the xz ground plane."""
    return float(np.hypot(a[0] - b[0], a[2] - b[2]))


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console

    console = Console()
    console.print("\n[bold cyan]=== Golf Ballistics Smoke Test ===[/bold cyan]\n")

    console.print("[bold]Test 1:[/bold] Forces at rest and in flight")
    resting = KinematicState()
    f_rest = compute_net_force(resting)
    assert np.allclose(f_rest, [0.0, -REGULATION_BALL.mass * GRAVITY, 0.0])
    moving = KinematicState(velocity=np.array([20.0, 0.0, 0.0]), angular_velocity=np.array([0.0, 0.0, 300.0]))
    f_move = compute_net_force(moving)
    console.print(f"  Rest force: {f_rest}")
    console.print(f"  Moving force (backspin): {f_move}")
    assert f_move[0] < 0.0, "Drag should oppose motion"
    assert f_move[1] > f_rest[1], "Backspin should add lift"

    console.print("\n[bold]Test 2:[/bold] Bounce keeps restitution fraction of vertical speed")
    bouncing = KinematicState(position=np.array([0.0, 0.0, 0.0]), velocity=np.array([5.0, -4.0, 0.0]))
    contact = resolve_ground_contact(bouncing)
    console.print(f"  In: {contact.incoming_vertical_speed:.3f}  Out: {contact.outgoing_vertical_speed:.3f}")
    assert abs(contact.outgoing_vertical_speed - 4.0 * REGULATION_BALL.restitution) < 1e-9

    console.print("\n[bold]Test 3:[/bold] Slow ball stops on contact")
    rolling = KinematicState(velocity=np.array([0.05, -0.1, 0.0]))
    contact = resolve_ground_contact(rolling)
    assert contact.stopped and not rolling.in_flight
    console.print("  Stopped on contact")

    console.print("\n[bold green]All ballistics checks passed![/bold green]\n")
