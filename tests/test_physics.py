"""
Unit Tests for the Parabola Flight Simulator
=============================================
Tests the drag model, the body definition and the Euler integrator.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import dataclasses
import logging
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from parabola.drag_model import drag_force, drag_magnitude, SPHERE_DRAG_COEFFICIENT
from parabola.projectile import (
    ProjectileBody, GRAVITY, analytic_range, analytic_max_height,
    analytic_flight_time, compute_acceleration,
)
from parabola.integrator import (
    simulate_euler, SimulationControls, TrajectorySample,
    ObstacleCollision, Landed, Outcome,
)


def drag_free_body(v0=20.0, angle=45.0, mass=1.0):
    return ProjectileBody(initial_velocity=v0, launch_angle_deg=angle,
                          drag_coefficient=0.0, mass=mass)


def euler_by_hand(v0, angle_deg, wall, dt=0.01, max_time=10.0, g=9.81,
                  cd=0.47, rho=1.225, area=0.01, mass=0.1):
    """Plain-arithmetic Euler loop: (samples, event kind, event tuple)."""
    angle = angle_deg * math.pi / 180
    vx = v0 * math.cos(angle)
    vy = v0 * math.sin(angle)
    x = y = t = 0.0
    samples = []
    while y >= 0 and t <= max_time:
        samples.append((t, x, y))
        if x >= wall:
            return samples, 'collision', (x, y, t)
        speed = math.sqrt(vx * vx + vy * vy)
        f = 0.5 * cd * rho * area * speed * speed
        ax = -(f * (vx / speed)) / mass
        ay = -g - (f * (vy / speed)) / mass
        vx += ax * dt
        vy += ay * dt
        x += vx * dt
        y += vy * dt
        t += dt
        if y < 0:
            time_to_land = -y / vy
            x -= vx * time_to_land
            y = 0.0
            t -= time_to_land
            samples.append((t, x, y))
            return samples, 'landed', (x, t)
    return samples, 'timeout', None


class TestDragModel:
    """Verify the quadratic drag force."""

    def test_zero_at_rest(self):
        assert drag_force(0.0, 0.0, cd=0.47, rho=1.225, area=0.01) == (0.0, 0.0)

    def test_points_along_velocity(self):
        fx, fy = drag_force(10.0, -5.0, cd=0.47, rho=1.225, area=0.01)
        assert fx * 10.0 + fy * -5.0 > 0

    def test_magnitude_is_quadratic(self):
        fx, fy = drag_force(3.0, 4.0, cd=0.5, rho=1.2, area=0.1)
        assert math.hypot(fx, fy) == pytest.approx(0.5 * 0.5 * 1.2 * 0.1 * 25.0)
        assert drag_magnitude(10.0, 0.5, 1.2, 0.1) == pytest.approx(
            4 * drag_magnitude(5.0, 0.5, 1.2, 0.1))

    def test_zero_coefficient_means_no_drag(self):
        fx, fy = drag_force(30.0, 10.0, cd=0.0, rho=1.225, area=0.01)
        assert fx == 0.0 and fy == 0.0

    def test_sphere_coefficient(self):
        assert SPHERE_DRAG_COEFFICIENT == 0.47
        assert ProjectileBody(20.0, 45.0).drag_coefficient == SPHERE_DRAG_COEFFICIENT


class TestProjectileBody:
    """Verify body definition and closed-form estimates."""

    def test_defaults(self):
        body = ProjectileBody(initial_velocity=20.0, launch_angle_deg=45.0)
        assert body.gravity == GRAVITY == 9.81
        assert body.drag_coefficient == 0.47
        assert body.air_density == 1.225
        assert body.area == 0.01
        assert body.mass == 0.1

    def test_immutable(self):
        body = ProjectileBody(initial_velocity=20.0, launch_angle_deg=45.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            body.mass = 2.0

    def test_velocity_components(self):
        body = ProjectileBody(initial_velocity=10.0, launch_angle_deg=30.0)
        vx, vy = body.initial_velocity_components()
        assert vx == pytest.approx(10.0 * math.sqrt(3) / 2)
        assert vy == pytest.approx(5.0)

    def test_analytic_range(self):
        body = drag_free_body()
        assert analytic_range(body) == pytest.approx(400.0 / 9.81)
        assert analytic_range(body) == pytest.approx(40.77, abs=0.01)

    def test_analytic_range_symmetric_in_angle(self):
        r30 = analytic_range(drag_free_body(angle=30.0))
        r60 = analytic_range(drag_free_body(angle=60.0))
        assert r30 == pytest.approx(r60)

    def test_analytic_range_zero_at_vertical(self):
        assert analytic_range(drag_free_body(angle=90.0)) == pytest.approx(0.0, abs=1e-12)

    def test_apex_and_flight_time(self):
        body = drag_free_body(v0=20.0, angle=90.0)
        assert analytic_max_height(body) == pytest.approx(400.0 / (2 * 9.81))
        assert analytic_flight_time(body) == pytest.approx(40.0 / 9.81)

    def test_gravity_only_without_drag(self):
        ax, ay = compute_acceleration(15.0, 5.0, drag_free_body())
        assert ax == 0.0
        assert ay == pytest.approx(-9.81)

    def test_drag_decelerates(self):
        body = ProjectileBody(initial_velocity=20.0, launch_angle_deg=45.0)
        ax, ay = compute_acceleration(15.0, 5.0, body)
        assert ax < 0
        assert ay < -9.81

    def test_drag_slows_a_falling_body(self):
        body = ProjectileBody(initial_velocity=20.0, launch_angle_deg=45.0)
        ax, ay = compute_acceleration(0.0, -10.0, body)
        assert ax == 0.0
        assert -9.81 < ay < 0


class TestSimulationControls:

    def test_defaults(self):
        controls = SimulationControls()
        assert controls.time_step == 0.01
        assert controls.max_time == 10.0
        assert math.isinf(controls.obstacle_distance)

    @pytest.mark.parametrize("kwargs", [
        {'time_step': 0.0},
        {'time_step': -0.01},
        {'max_time': 0.0},
        {'obstacle_distance': -1.0},
        {'obstacle_distance': math.nan},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SimulationControls(**kwargs)

    def test_obstacle_at_launch_point_allowed(self):
        assert SimulationControls(obstacle_distance=0.0).obstacle_distance == 0.0


class TestIntegrator:
    """Verify the Euler integrator, wall collision and landing."""

    def test_drag_free_range_matches_analytic(self):
        body = drag_free_body()
        result = simulate_euler(body, SimulationControls(0.01, 10.0, 1000.0))
        assert result.landed
        assert isinstance(result.event, Landed)
        assert result.range_total == pytest.approx(analytic_range(body), rel=0.03)

    def test_wall_collision(self):
        body = drag_free_body()
        result = simulate_euler(body, SimulationControls(0.01, 10.0, 5.0))
        assert result.outcome is Outcome.COLLISION
        event = result.event
        assert isinstance(event, ObstacleCollision)
        assert event.x >= 5.0
        assert event.y > 0
        # the hit position is the last recorded sample, and the first past the wall
        last = result.final_sample
        assert (last.x, last.y, last.time) == (event.x, event.y, event.time)
        assert all(s.x < 5.0 for s in result.samples[:-1])

    def test_wall_at_launch_point(self):
        result = simulate_euler(drag_free_body(), SimulationControls(obstacle_distance=0.0))
        assert result.samples == [TrajectorySample(0.0, 0.0, 0.0)]
        assert result.event == ObstacleCollision(0.0, 0.0, 0.0)

    def test_first_sample_is_origin(self):
        result = simulate_euler(drag_free_body())
        assert result.samples[0] == TrajectorySample(0.0, 0.0, 0.0)

    def test_velocity_updated_before_position(self):
        body = drag_free_body()
        dt = 0.01
        result = simulate_euler(body, SimulationControls(time_step=dt))
        vx, vy = body.initial_velocity_components()
        second = result.samples[1]
        assert second.time == dt
        assert second.x == pytest.approx(vx * dt)
        assert second.y == pytest.approx((vy - 9.81 * dt) * dt)

    def test_time_strictly_increasing(self):
        cases = [
            (drag_free_body(), SimulationControls()),
            (ProjectileBody(20.0, 60.0), SimulationControls(obstacle_distance=15.0)),
            (ProjectileBody(0.0, 0.0), SimulationControls()),
            (ProjectileBody(5.0, 0.0), SimulationControls()),
            (ProjectileBody(50.0, 80.0), SimulationControls(time_step=0.05, max_time=2.0)),
        ]
        for body, controls in cases:
            t = simulate_euler(body, controls).time
            assert np.all(np.diff(t) > 0)

    def test_landing_sample_on_ground(self):
        result = simulate_euler(ProjectileBody(20.0, 45.0))
        assert result.landed
        final = result.final_sample
        assert final.y == 0.0
        assert result.event == Landed(final.x, final.time)
        assert all(s.y > 0 for s in result.samples[1:-1])

    def test_landing_correction_stays_on_drag_free_line(self):
        # without drag x = vx * t holds exactly up to rounding, including
        # the corrected landing sample
        body = drag_free_body(v0=25.0, angle=35.0)
        result = simulate_euler(body)
        vx, _ = body.initial_velocity_components()
        final = result.final_sample
        assert final.x == pytest.approx(vx * final.time, rel=1e-9)

    def test_landing_within_one_step_of_analytic(self):
        body = drag_free_body(v0=20.0, angle=45.0)
        for dt in (0.02, 0.01, 0.005):
            result = simulate_euler(body, SimulationControls(time_step=dt))
            assert abs(result.flight_time - analytic_flight_time(body)) <= dt * (1 + 1e-6)

    def test_timeout_without_event(self):
        calls = []
        result = simulate_euler(drag_free_body(), SimulationControls(max_time=0.05),
                                on_event=calls.append)
        assert result.event is None
        assert result.outcome is Outcome.TIMED_OUT
        assert calls == []
        assert result.final_sample.y > 0
        assert result.flight_time <= 0.05

    def test_on_event_fires_once(self):
        calls = []
        result = simulate_euler(drag_free_body(), SimulationControls(obstacle_distance=5.0),
                                on_event=calls.append)
        assert calls == [result.event]

        calls.clear()
        result = simulate_euler(drag_free_body(), on_event=calls.append)
        assert calls == [result.event]
        assert isinstance(calls[0], Landed)

    def test_drop_from_rest(self):
        # zero launch speed: no drag direction on the first step, must not crash
        result = simulate_euler(ProjectileBody(initial_velocity=0.0, launch_angle_deg=0.0))
        assert result.landed
        assert len(result.samples) <= 3
        assert result.final_sample.y == 0.0
        assert np.all(result.x == 0.0)
        assert not np.any(np.isnan(result.time))

    def test_vertical_launch_stays_on_axis(self):
        result = simulate_euler(ProjectileBody(initial_velocity=20.0, launch_angle_deg=90.0))
        assert result.landed
        assert np.allclose(result.x, 0.0, atol=1e-9)
        assert result.max_height > 5.0

    def test_drag_shortens_range(self):
        with_drag = ProjectileBody(20.0, 45.0)
        no_drag = dataclasses.replace(with_drag, drag_coefficient=0.0)
        r_drag = simulate_euler(with_drag).range_total
        r_free = simulate_euler(no_drag).range_total
        assert r_drag < r_free
        assert r_drag < analytic_range(with_drag)

    def test_heavier_body_flies_further(self):
        light = simulate_euler(ProjectileBody(20.0, 45.0, mass=0.1)).range_total
        heavy = simulate_euler(ProjectileBody(20.0, 45.0, mass=0.15)).range_total
        assert heavy > light

    def test_reproducible(self):
        body = ProjectileBody(23.0, 37.0)
        controls = SimulationControls(obstacle_distance=12.5)
        a = simulate_euler(body, controls)
        b = simulate_euler(body, controls)
        assert a.samples == b.samples
        assert a.event == b.event

    def test_array_views(self):
        result = simulate_euler(drag_free_body())
        assert len(result.time) == len(result.x) == len(result.y) == len(result.samples)
        assert result.max_height == pytest.approx(
            max(s.y for s in result.samples))

    @pytest.mark.parametrize("v0, angle, wall", [
        (20.0, 45.0, 1000.0),
        (20.0, 45.0, 5.0),
        (30.0, 10.0, 7.3),
        (15.0, 80.0, 2.0),
        (40.0, 60.0, 1e9),
    ])
    def test_matches_plain_loop_exactly(self, v0, angle, wall):
        result = simulate_euler(ProjectileBody(v0, angle),
                                SimulationControls(obstacle_distance=wall))
        samples, kind, payload = euler_by_hand(v0, angle, wall)
        assert [(s.time, s.x, s.y) for s in result.samples] == samples
        if kind == 'collision':
            assert result.event == ObstacleCollision(*payload)
        elif kind == 'landed':
            assert result.event == Landed(*payload)
        else:
            assert result.event is None

    def test_outcomes_mutually_exclusive(self):
        for v0 in (0.0, 5.0, 20.0, 40.0):
            for angle in (0.0, 30.0, 45.0, 80.0, 90.0):
                for wall in (0.0, 3.0, 15.0, math.inf):
                    for max_time in (0.2, 10.0):
                        controls = SimulationControls(max_time=max_time,
                                                      obstacle_distance=wall)
                        result = simulate_euler(ProjectileBody(v0, angle), controls)
                        flags = [result.collided, result.landed,
                                 result.outcome is Outcome.TIMED_OUT]
                        assert flags.count(True) == 1

                        final = result.final_sample
                        if result.collided:
                            assert final.x >= wall
                            assert result.event == ObstacleCollision(final.x, final.y, final.time)
                        elif result.landed:
                            assert final.y == 0.0
                            assert result.event == Landed(final.x, final.time)
                        else:
                            assert result.event is None
                            assert final.y >= 0
                            assert final.time <= max_time < final.time + controls.time_step

    def test_wall_checked_before_landing_step(self):
        # a wall at the last airborne position wins over the landing that the
        # next step would produce
        body = ProjectileBody(20.0, 45.0)
        baseline = simulate_euler(body)
        before_landing = baseline.samples[-2]
        result = simulate_euler(body, SimulationControls(obstacle_distance=before_landing.x))
        assert result.collided
        assert result.event == ObstacleCollision(before_landing.x, before_landing.y,
                                                 before_landing.time)
        assert result.samples == baseline.samples[:-1]

    def test_wall_passed_during_landing_step(self):
        # wall crossed and ground crossed in the same step: the step lands
        body = ProjectileBody(20.0, 45.0)
        baseline = simulate_euler(body)
        before_landing, landing = baseline.samples[-2:]
        wall = (before_landing.x + landing.x) / 2
        result = simulate_euler(body, SimulationControls(obstacle_distance=wall))
        assert result.landed
        assert result.samples == baseline.samples
        assert result.event == baseline.event

    def test_summary(self):
        text = simulate_euler(drag_free_body(), SimulationControls(obstacle_distance=5.0)).summary()
        assert 'collision' in text
        assert 'Range' in text
        assert 'No-drag apex' in text

    def test_logs_outcome(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='parabola.integrator'):
            simulate_euler(drag_free_body())
        assert any('landed' in r.getMessage() for r in caplog.records)


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
