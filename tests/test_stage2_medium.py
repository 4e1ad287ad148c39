"""
Golf Physics Test Suite: Stage 2 MEDIUM

Integration and behavior tests: do the components work together correctly?

Tests:
    - Reference shot (45° at 20 m/s) against vacuum range
    - Wind effects (tailwind, headwind, crosswind)
    - Putter roll-out and deceleration
    - Spin effects on carry
    - Evaluation of simulated shots (comparison, analysis text)
    - Configuration loading and overrides
    - Flat records for shot history
"""

import json
from pathlib import Path

import numpy as np
import pytest
import yaml

from golf_physics.ball import GRAVITY, BallProperties, ClubArchetype
from golf_physics.ballistics import horizontal_distance, launch_velocity
from golf_physics.config import (
    CONFIGS_DIR,
    DEFAULT_CONFIG,
    SimulationConfig,
    load_simulation_config,
)
from golf_physics.evaluation import (
    ShotAnalysis,
    analyze_shot,
    compare_to_ideal,
    launch_angle,
    optimal_launch_angle,
)
from golf_physics.shot import ShotAccuracy, ShotParameters
from golf_physics.simulator import ShotSimulator, estimate_range, simulate_shot


def _shot_at(vx: float, vy: float) -> ShotParameters:
    return ShotParameters(initial_position=np.zeros(3), initial_velocity=np.array([vx, vy, 0.0]))


def _with(params: ShotParameters, **changes) -> ShotParameters:
    """Copy of `params` with some launch fields replaced."""
    fields = dict(
        initial_position=params.initial_position,
        initial_velocity=params.initial_velocity,
        spin=params.spin,
        club=params.club,
        wind=params.wind,
        target=params.target,
    )
    fields.update(changes)
    return ShotParameters(**fields)


# ============================================================
# 1. Reference Flight
# ============================================================

class TestReferenceShot:
    """45° launch at ~20 m/s, no spin, no wind, Driver."""

    def test_trajectory_not_empty(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert len(result.trajectory) > 1
        assert result.trajectory.shape[1] == 3

    def test_trajectory_starts_at_launch(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert np.array_equal(result.trajectory[0], scenario_a.initial_position)

    def test_flight_time_window(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert 2.0 <= result.flight_time <= 4.0, f"flight_time={result.flight_time:.3f}"

    def test_drag_shortens_carry(self, scenario_a):
        result = simulate_shot(scenario_a)
        vacuum_range = scenario_a.ball_speed**2 / GRAVITY
        assert 0.0 < result.distance < vacuum_range, \
            f"carry={result.distance:.2f}, vacuum={vacuum_range:.2f}"

    def test_landing_is_first_contact(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert result.landing_position is not None
        assert result.landing_position[1] == pytest.approx(0.02135)
        assert np.array_equal(result.trajectory[result.landing_index], result.landing_position)
        assert np.array_equal(result.contacts[0].position, result.landing_position)

    def test_carry_is_horizontal_distance_to_landing(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert result.distance == pytest.approx(
            horizontal_distance(result.landing_position, scenario_a.initial_position)
        )

    def test_ball_bounces_and_rolls_on(self, scenario_a):
        result = simulate_shot(scenario_a)
        assert result.bounce_count > 1
        assert result.total_distance > result.distance
        assert result.total_time > result.flight_time

    def test_apex_height_reasonable(self, scenario_a):
        """Apex is below the vacuum apex v_y²/2g (~10.2 m) but well above ground."""
        result = simulate_shot(scenario_a)
        assert 5.0 < result.max_height < 14.14**2 / (2 * GRAVITY)

    def test_max_height_relative_to_launch(self):
        params = ShotParameters(
            initial_position=np.array([0.0, 10.0, 0.0]),
            initial_velocity=np.array([10.0, 0.0, 0.0]),
        )
        result = simulate_shot(params)
        assert result.max_height == 0.0
        assert result.apex_index == 0

    def test_estimate_range_matches_simulated_landing(self, scenario_a):
        fired = _with(scenario_a, initial_velocity=launch_velocity(20.0, np.pi / 4))
        result = simulate_shot(fired)
        assert estimate_range(20.0, np.pi / 4) == pytest.approx(result.landing_position[0])


# ============================================================
# 2. Wind Effects
# ============================================================

class TestWindEffects:
    """Wind changes the relative airspeed the drag sees."""

    def test_tailwind_does_not_shorten_carry(self, scenario_a, scenario_b):
        calm = simulate_shot(scenario_a)
        tail = simulate_shot(scenario_b)
        assert tail.distance >= calm.distance, \
            f"tailwind={tail.distance:.2f}, calm={calm.distance:.2f}"

    def test_headwind_reduces_carry(self, scenario_a):
        calm = simulate_shot(scenario_a)
        head = simulate_shot(_with(scenario_a, wind=np.array([-5.0, 0.0, 0.0])))
        assert head.distance < calm.distance

    def test_crosswind_deflects_ball(self, scenario_a):
        calm = simulate_shot(scenario_a)
        cross = simulate_shot(_with(scenario_a, wind=np.array([0.0, 0.0, 8.0])))
        assert abs(calm.landing_position[2]) < 1e-9
        assert cross.landing_position[2] > 0.5

    def test_optimal_launch_angle_rule(self):
        assert optimal_launch_angle(20.0) == pytest.approx(np.pi / 4)
        assert optimal_launch_angle(20.0, np.array([0.0, 10.0, 0.0])) == pytest.approx(np.radians(44.0))


# ============================================================
# 3. Putter Roll-out
# ============================================================

class TestPutterRoll:
    """A putt along the ground at 3 m/s."""

    def test_contacts_ground_on_first_step(self, putt):
        result = simulate_shot(putt)
        assert result.landing_index == 1
        assert result.flight_time == pytest.approx(1.0 / 60.0)

    def test_rolls_over_many_steps_then_stops(self, putt):
        result = simulate_shot(putt)
        assert result.stopped
        assert result.bounce_count > 10
        assert result.contacts[-1].stopped
        assert not any(c.stopped for c in result.contacts[:-1])
        assert result.total_time < DEFAULT_CONFIG.max_time

    def test_horizontal_speed_never_increases(self, putt):
        result = simulate_shot(putt)
        speeds = np.array([c.horizontal_speed for c in result.contacts])
        assert speeds[0] > 0.1
        assert np.all(np.diff(speeds) <= 1e-12)

    def test_step_advance_shrinks(self, putt):
        result = simulate_shot(putt)
        steps = np.diff(result.trajectory[:, 0])
        assert np.all(steps >= 0.0)
        assert np.all(np.diff(steps) <= 1e-12)

    def test_ball_stays_on_the_ground(self, putt):
        result = simulate_shot(putt)
        assert np.all(result.trajectory[1:, 1] < 0.05)


# ============================================================
# 4. Spin Effects
# ============================================================

class TestSpinEffects:
    """Magnus force from the spin vector."""

    def test_backspin_extends_carry(self, spin_shot):
        spun = simulate_shot(spin_shot)
        plain = simulate_shot(_with(spin_shot, spin=np.zeros(3)))
        assert spun.distance > plain.distance
        assert spun.flight_time >= plain.flight_time

    def test_sidespin_curves_flight(self, spin_shot):
        hook = simulate_shot(_with(spin_shot, spin=np.array([0.0, 3.0, 0.0])))
        assert hook.landing_position[2] < -0.1

    def test_topspin_shortens_flight(self, spin_shot):
        top = simulate_shot(_with(spin_shot, spin=np.array([0.0, 0.0, -3.0])))
        plain = simulate_shot(_with(spin_shot, spin=np.zeros(3)))
        assert top.flight_time < plain.flight_time


# ============================================================
# 5. Evaluation of Simulated Shots
# ============================================================

class TestShotEvaluation:
    """Comparison and analysis built from a ShotResult."""

    def test_untargeted_shot_scores_zero_accuracy(self):
        """Without a target the default target is measured against the frame origin."""
        result = simulate_shot(_shot_at(30.0, 20.0))
        assert result.distance > 50.0
        assert result.accuracy == ShotAccuracy.measure(np.array([100.0, 0.0, 0.0]), np.zeros(3))
        assert result.accuracy.accuracy == 0.0
        assert result.accuracy.actual_distance == 0.0

    def test_explicit_target_accuracy(self, scenario_a):
        first = simulate_shot(scenario_a)
        aimed = simulate_shot(_with(scenario_a, target=first.landing_position))
        assert aimed.accuracy.accuracy == 1.0
        assert aimed.accuracy.lateral_deviation == 0.0

    def test_comparison_components(self, scenario_a):
        result = simulate_shot(scenario_a)
        comparison = compare_to_ideal(result)
        assert comparison.distance_efficiency == pytest.approx(result.distance / 240.0)
        ideal_angle = 10.5 * 0.7
        assert comparison.launch_angle_accuracy == pytest.approx(1.0 - abs(45.0 - ideal_angle) / ideal_angle, rel=1e-3)
        assert comparison.spin_accuracy == 0.0
        assert comparison.target_accuracy == result.accuracy.accuracy

    def test_overall_rating_is_mean_of_four(self, scenario_a):
        c = compare_to_ideal(simulate_shot(scenario_a))
        mean = (c.distance_efficiency + c.launch_angle_accuracy + c.spin_accuracy + c.target_accuracy) / 4.0
        assert c.overall_rating == pytest.approx(mean)
        assert c.grade == "F"

    def test_nominal_spin_scores_full_spin_accuracy(self):
        params = ShotParameters(
            initial_position=np.zeros(3),
            initial_velocity=np.array([20.0, 3.0, 0.0]),
            spin=np.array([0.0, 0.0, 2500.0]),
            club=ClubArchetype.DRIVER,
        )
        comparison = compare_to_ideal(simulate_shot(params, config=SimulationConfig(max_time=1.0)))
        assert comparison.spin_accuracy == 1.0

    def test_rating_above_one_grades_f(self):
        """Uncapped distance efficiency can push a long putt past 1.0."""
        params = ShotParameters(
            initial_position=np.zeros(3),
            initial_velocity=launch_velocity(40.0, np.radians(2.8)),
            spin=np.array([0.0, 0.0, 100.0]),
            club=ClubArchetype.PUTTER,
        )
        first = simulate_shot(params)
        aimed = simulate_shot(_with(params, target=first.landing_position))
        comparison = compare_to_ideal(aimed)
        assert comparison.distance_efficiency > 1.0
        assert comparison.overall_rating > 1.0
        assert comparison.grade == "F"

    def test_comparison_serializes_with_grade(self, scenario_a):
        data = compare_to_ideal(simulate_shot(scenario_a)).to_dict()
        assert data["grade"] == "F"
        json.dumps(data)

    def test_analysis_fields(self, scenario_a):
        result = simulate_shot(scenario_a)
        analysis = analyze_shot(result)
        assert analysis.club is ClubArchetype.DRIVER
        assert analysis.carry_distance == result.distance
        assert analysis.apex_height == result.max_height
        assert analysis.launch_angle == pytest.approx(45.0)
        assert analysis.ball_speed == pytest.approx(np.hypot(14.14, 14.14))
        assert analysis.spin_rate == 0.0
        assert analysis.efficiency == pytest.approx(result.distance / 240.0)

    def test_description_format(self):
        analysis = ShotAnalysis(
            club=ClubArchetype.DRIVER,
            carry_distance=123.456,
            apex_height=20.04,
            flight_time=5.56,
            launch_angle=12.26,
            ball_speed=65.0,
            spin_rate=2500.0,
            efficiency=0.5144,
        )
        assert analysis.description == (
            "Shot Analysis:\n"
            "Club: Driver\n"
            "Distance: 123.5m\n"
            "Launch Angle: 12.3°\n"
            "Ball Speed: 65.0m/s\n"
            "Max Height: 20.0m\n"
            "Flight Time: 5.6s\n"
            "Efficiency: 51.4%"
        )

    def test_launch_angle_of_reference_shot(self, scenario_a):
        assert launch_angle(scenario_a) == pytest.approx(45.0)


# ============================================================
# 6. Configuration
# ============================================================

class TestSimulationConfig:
    """YAML settings and overrides."""

    def test_config_file_exists(self):
        assert (CONFIGS_DIR / "simulation.yaml").exists()

    def test_file_matches_builtin_defaults(self):
        loaded = load_simulation_config()
        assert loaded.to_dict() == DEFAULT_CONFIG.to_dict()

    def test_yaml_has_ball_block(self):
        with open(CONFIGS_DIR / "simulation.yaml") as f:
            data = yaml.safe_load(f)
        assert set(data["ball"]) == set(BallProperties().to_dict())

    def test_default_step_count(self):
        assert DEFAULT_CONFIG.max_steps == 900

    def test_overrides_win(self):
        cfg = load_simulation_config(overrides={"max_time": 5.0, "ball": {"restitution": 0.5}})
        assert cfg.max_time == 5.0
        assert cfg.ball.restitution == 0.5
        assert cfg.ball.mass == 0.0459

    def test_custom_file(self, tmp_path: Path):
        path = tmp_path / "sim.yaml"
        path.write_text("time_step: 0.01\ndefault_target: [50, 0, 0]\nball:\n  drag_coefficient: 0.3\n")
        cfg = load_simulation_config(path)
        assert cfg.time_step == 0.01
        assert cfg.default_target == (50.0, 0.0, 0.0)
        assert cfg.ball.drag_coefficient == 0.3
        assert cfg.max_time == 15.0

    def test_config_ball_used_by_simulator(self, scenario_a):
        dead = load_simulation_config(overrides={"ball": {"restitution": 0.0}})
        result = ShotSimulator(config=dead).simulate(scenario_a)
        assert result.contacts[0].outgoing_vertical_speed == 0.0

    def test_lower_drag_carries_further(self, scenario_a):
        slick = load_simulation_config(overrides={"ball": {"drag_coefficient": 0.2}})
        assert simulate_shot(scenario_a, config=slick).distance > simulate_shot(scenario_a).distance

    def test_config_default_target_used(self, scenario_a):
        cfg = SimulationConfig(default_target=(30.0, 0.0, 0.0))
        result = simulate_shot(scenario_a, config=cfg)
        expected = ShotAccuracy.measure(np.array([30.0, 0.0, 0.0]), np.zeros(3))
        assert result.accuracy == expected
        assert result.accuracy.accuracy == pytest.approx(1.0 - np.hypot(30.0, 30.0) / 50.0)


# ============================================================
# 7. Records
# ============================================================

class TestShotRecords:
    """Flat records for shot history."""

    def test_parameters_record_is_flat(self, scenario_a):
        record = scenario_a.to_record()
        assert record["club"] == "Driver"
        assert record["initial_velocity_x"] == 14.14
        assert record["target_x"] is None
        assert all(not isinstance(v, (list, dict, np.ndarray)) for v in record.values())
        json.dumps(record)

    def test_parameters_round_trip(self, scenario_b):
        rebuilt = ShotParameters.from_record(scenario_b.to_record())
        assert rebuilt.id == scenario_b.id
        assert rebuilt.timestamp == scenario_b.timestamp
        assert rebuilt.club is scenario_b.club
        assert np.array_equal(rebuilt.wind, scenario_b.wind)
        assert rebuilt.target is None

    def test_ids_are_unique(self):
        a = ShotParameters(initial_position=np.zeros(3), initial_velocity=np.zeros(3))
        b = ShotParameters(initial_position=np.zeros(3), initial_velocity=np.zeros(3))
        assert a.id != b.id

    def test_result_record(self, scenario_a):
        result = simulate_shot(scenario_a)
        record = result.to_record()
        assert record["id"] == scenario_a.id
        assert record["distance"] == result.distance
        assert record["landing_position_y"] == pytest.approx(0.02135)
        assert record["sample_count"] == len(result.trajectory)
        json.dumps(record)

    def test_result_json(self, scenario_a):
        result = simulate_shot(scenario_a)
        data = json.loads(result.to_json())
        assert len(data["trajectory"]) == len(result.trajectory)
        assert data["landing_index"] == result.landing_index
        assert len(data["contacts"]) == result.bounce_count
