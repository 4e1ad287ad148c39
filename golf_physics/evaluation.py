"""
Golf Physics Core: Shot Evaluation

Scores a simulated shot against the norms of its club and against a target:
launch angle, carry efficiency, spin match, and an overall letter grade.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from golf_physics.ball import ClubArchetype
from golf_physics.shot import ShotParameters, ShotResult

# Lower bound of each grade band, best first. The top band closes at 1.0;
# anything above it or below 0.2 is an F.
GRADE_BANDS = (
    (0.9, "A+"),
    (0.8, "A"),
    (0.7, "B+"),
    (0.6, "B"),
    (0.5, "C+"),
    (0.4, "C"),
    (0.3, "D+"),
    (0.2, "D"),
)


def grade_for_rating(rating: float) -> str:
    """Map an overall rating onto the letter scale.

    >>> grade_for_rating(0.95), grade_for_rating(0.85), grade_for_rating(0.15)
    ('A+', 'A', 'F')
    >>> grade_for_rating(1.05)
    'F'
    """
    if rating > 1.0:
        return "F"
    for lower, letter in GRADE_BANDS:
        if rating >= lower:
            return letter
    return "F"


# ---------- Metrics ----------
def launch_angle(parameters: ShotParameters) -> float:
    """Vertical launch angle in degrees."""
    vx, vy, vz = parameters.initial_velocity
    return float(np.degrees(np.arctan2(vy, np.hypot(vx, vz))))


def efficiency(distance: float, club: ClubArchetype) -> float:
    """Carry as a fraction of the club's typical carry, capped at 1.0."""
    return min(1.0, distance / club.ideal_distance)


def spin_accuracy(parameters: ShotParameters) -> float:
    """1 minus the relative miss of the spin rate against nominal backspin."""
    ideal = parameters.club.nominal_spin.backspin
    return max(0.0, 1.0 - abs(parameters.spin_rate - ideal) / ideal)


def launch_angle_accuracy(parameters: ShotParameters) -> float:
    """1 minus the relative miss of the launch angle against loft * 0.7.

    Not clamped: a launch far off the ideal goes negative.
    """
    ideal = parameters.club.ideal_launch_angle
    return 1.0 - abs(launch_angle(parameters) - ideal) / ideal


def optimal_launch_angle(speed: float, wind: Optional[np.ndarray] = None) -> float:
    """Rule-of-thumb launch angle (radians) for maximum distance.

    45° in still air, nudged by the vertical wind component. The rule does
    not depend on `speed`.
    """
    wind_effect = 0.0 if wind is None else float(wind[1]) * 0.1
    return float(np.radians(45.0 - wind_effect))


# ---------- Comparison ----------
@dataclass(frozen=True)
class ShotComparison:
    """A shot measured against the ideal for its club."""
    distance_efficiency: float
    launch_angle_accuracy: float
    spin_accuracy: float
    target_accuracy: float
    overall_rating: float

    @property
    def grade(self) -> str:
        return grade_for_rating(self.overall_rating)

    def to_dict(self) -> dict:
        return {
            "distance_efficiency": self.distance_efficiency,
            "launch_angle_accuracy": self.launch_angle_accuracy,
            "spin_accuracy": self.spin_accuracy,
            "target_accuracy": self.target_accuracy,
            "overall_rating": self.overall_rating,
            "grade": self.grade,
        }


def compare_to_ideal(result: ShotResult) -> ShotComparison:
    """Compare a simulated shot to the ideal for its club.

    overall_rating is the plain mean of distance efficiency (uncapped),
    launch angle accuracy, spin accuracy and target accuracy.
    """
    params = result.parameters
    distance_eff = result.distance / params.club.ideal_distance
    angle_acc = launch_angle_accuracy(params)
    spin_acc = spin_accuracy(params)
    target_acc = result.accuracy.accuracy
    overall = (distance_eff + angle_acc + spin_acc + target_acc) / 4.0
    return ShotComparison(
        distance_efficiency=distance_eff,
        launch_angle_accuracy=angle_acc,
        spin_accuracy=spin_acc,
        target_accuracy=target_acc,
        overall_rating=overall,
    )


# ---------- Analysis ----------
@dataclass(frozen=True)
class ShotAnalysis:
    """Display summary of one shot."""
    club: ClubArchetype
    carry_distance: float
    apex_height: float
    flight_time: float
    launch_angle: float
    ball_speed: float
    spin_rate: float
    efficiency: float

    @property
    def description(self) -> str:
        # Field order and one-decimal formatting are relied on by saved reports.
        return "\n".join([
            "Shot Analysis:",
            f"Club: {self.club.value}",
            f"Distance: {self.carry_distance:.1f}m",
            f"Launch Angle: {self.launch_angle:.1f}°",
            f"Ball Speed: {self.ball_speed:.1f}m/s",
            f"Max Height: {self.apex_height:.1f}m",
            f"Flight Time: {self.flight_time:.1f}s",
            f"Efficiency: {self.efficiency:.1%}",
        ])

    def to_dict(self) -> dict:
        return {
            "club": self.club.value,
            "carry_distance": self.carry_distance,
            "apex_height": self.apex_height,
            "flight_time": self.flight_time,
            "launch_angle": self.launch_angle,
            "ball_speed": self.ball_speed,
            "spin_rate": self.spin_rate,
            "efficiency": self.efficiency,
        }


def analyze_shot(result: ShotResult) -> ShotAnalysis:
    """Summarize a simulated shot for display."""
    params = result.parameters
    return ShotAnalysis(
        club=params.club,
        carry_distance=result.distance,
        apex_height=result.max_height,
        flight_time=result.flight_time,
        launch_angle=launch_angle(params),
        ball_speed=params.ball_speed,
        spin_rate=params.spin_rate,
        efficiency=efficiency(result.distance, params.club),
    )


# ---------- Smoke Test ----------
if __name__ == "__main__":
    from rich.console import Console
    from rich.table import Table

    from golf_physics.ballistics import launch_velocity
    from golf_physics.simulator import simulate_shot

    console = Console()
    console.print("\n[bold cyan]=== Shot Evaluation Smoke Test ===[/bold cyan]\n")

    console.print("[bold]Test 1:[/bold] Grade bands")
    for rating, expected in [(0.95, "A+"), (0.85, "A"), (0.15, "F")]:
        assert grade_for_rating(rating) == expected, f"{rating} -> {grade_for_rating(rating)}"
        console.print(f"  {rating:.2f} -> {expected}")

    console.print("\n[bold]Test 2:[/bold] One shot per club at its ideal launch angle")
    table = Table(title="Club comparison")
    table.add_column("Club", style="cyan")
    table.add_column("Carry (m)", style="green")
    table.add_column("Rating", style="yellow")
    table.add_column("Grade")
    for club in ClubArchetype:
        params = ShotParameters(
            initial_position=np.zeros(3),
            initial_velocity=launch_velocity(40.0, np.radians(club.ideal_launch_angle)),
            club=club,
        )
        result = simulate_shot(params)
        comparison = compare_to_ideal(result)
        table.add_row(club.value, f"{result.distance:.1f}",
                      f"{comparison.overall_rating:.2f}", comparison.grade)
    console.print(table)

    console.print("\n[bold green]All evaluation checks passed![/bold green]\n")
