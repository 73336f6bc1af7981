"""
Validation Against Reference Solutions
=======================================
With drag switched off the Euler integrator must reproduce the
closed-form range and apex

    R = v0² · sin(2θ) / g        H = (v0 · sin θ)² / (2g)

with an error bounded by a constant times the timestep (forward Euler is
first order). With drag switched on there is no closed form, so the
reference landing point and apex come from an adaptive high-order solver
(scipy solve_ivp, RK45, with a terminal ground-crossing event and an apex
event).

The observed order is the slope of log(error) against log(dt), fitted
with scipy.stats.linregress. The apex error is used by default: the
landing point is snapped to the ground once per run, so the range error
stays within one step but does not shrink smoothly with dt.

Also prints a side-by-side table of drag-corrected vs drag-free range
for every bird in the catalog.
"""

from dataclasses import dataclass, replace
from typing import Dict, List, Sequence, Tuple

import numpy as np
from scipy.integrate import solve_ivp
from scipy.stats import linregress

from .integrator import simulate_euler, SimulationControls
from .presets import ALL_BIRDS
from .projectile import (
    ProjectileBody, analytic_range, analytic_max_height, analytic_flight_time,
    compute_acceleration,
)


DEFAULT_TIME_STEPS = (0.04, 0.02, 0.01, 0.005, 0.0025)


@dataclass
class ConvergenceResult:
    """Euler landing point and apex at one timestep compared with the reference."""
    time_step: float
    sim_range: float        # Euler landing x (m)
    ref_range: float        # reference landing x (m)
    abs_error: float        # m
    error_pct: float        # %
    sim_max_height: float   # highest Euler sample (m)
    ref_max_height: float   # reference apex (m)
    height_error: float     # m


def drag_free(body: ProjectileBody) -> ProjectileBody:
    return replace(body, drag_coefficient=0.0)


def reference_flight(body: ProjectileBody, max_time: float = 60.0,
                     rtol: float = 1e-10, atol: float = 1e-10) -> Tuple[float, float]:
    """
    Landing x and apex height of ``body`` from a tight-tolerance RK45 solve.

    Uses the same force model as the Euler integrator. Raises ValueError if
    the body does not come down within max_time.
    """
    def rhs(t: float, s: np.ndarray) -> np.ndarray:
        ax, ay = compute_acceleration(s[2], s[3], body)
        return np.array([s[2], s[3], ax, ay])

    def ground_event(t: float, s: np.ndarray) -> float:
        return float(s[1])
    ground_event.terminal = True   # type: ignore[attr-defined]
    ground_event.direction = -1.0  # type: ignore[attr-defined]

    def apex_event(t: float, s: np.ndarray) -> float:
        return float(s[3])
    apex_event.direction = -1.0    # type: ignore[attr-defined]

    vx, vy = body.initial_velocity_components()
    sol = solve_ivp(
        rhs,
        t_span=(0.0, max_time),
        y0=np.array([0.0, 0.0, vx, vy]),
        method='RK45',
        rtol=rtol,
        atol=atol,
        events=(ground_event, apex_event),
    )
    if not len(sol.t_events[0]):
        raise ValueError(f"Reference solve did not land within {max_time} s")
    # a launch at or below the horizon never climbs
    apex = float(sol.y_events[1][0][1]) if len(sol.t_events[1]) else 0.0
    return float(sol.y_events[0][0][0]), max(apex, 0.0)


def reference_range(body: ProjectileBody, max_time: float = 60.0,
                    rtol: float = 1e-10, atol: float = 1e-10) -> float:
    """Landing x of ``body`` from :func:`reference_flight`."""
    return reference_flight(body, max_time, rtol, atol)[0]


def convergence_study(body: ProjectileBody,
                      time_steps: Sequence[float] = DEFAULT_TIME_STEPS,
                      with_drag: bool = False,
                      max_time: float = None,
                      verbose: bool = False) -> List[ConvergenceResult]:
    """
    Land ``body`` at each timestep and compare the landing point and apex
    with the reference: the analytic values when ``with_drag`` is False
    (drag is removed from the body), the solve_ivp values otherwise.

    max_time defaults to twice the drag-free flight time (at least 1 s), so
    every run lands instead of timing out.
    """
    target = body if with_drag else drag_free(body)
    if max_time is None:
        max_time = max(2 * analytic_flight_time(target), 1.0)
    if with_drag:
        ref, ref_height = reference_flight(target, max_time)
    else:
        ref, ref_height = analytic_range(target), analytic_max_height(target)

    results = []
    if verbose:
        label = "RK45 reference" if with_drag else "analytic"
        print(f"\n{'='*60}")
        print(f"  CONVERGENCE: v0={target.initial_velocity:.1f} m/s, "
              f"θ={target.launch_angle_deg:.1f}°, Cd={target.drag_coefficient:.2f}")
        print(f"  {label} R = {ref:.4f} m, H = {ref_height:.4f} m")
        print(f"{'='*60}")
        print(f"{'dt (s)':>10} {'Sim R (m)':>12} {'|Err| (m)':>12} {'Err %':>8} "
              f"{'|Err H| (m)':>12}")
        print("-" * 60)

    for dt in time_steps:
        traj = simulate_euler(target, SimulationControls(time_step=dt, max_time=max_time))
        err = abs(traj.range_total - ref)
        err_pct = 100.0 * err / abs(ref) if ref != 0 else float('nan')
        height_err = abs(traj.max_height - ref_height)
        results.append(ConvergenceResult(
            time_step=dt,
            sim_range=traj.range_total,
            ref_range=ref,
            abs_error=err,
            error_pct=err_pct,
            sim_max_height=traj.max_height,
            ref_max_height=ref_height,
            height_error=height_err,
        ))
        if verbose:
            print(f"{dt:>10.4f} {traj.range_total:>12.4f} {err:>12.5f} {err_pct:>8.3f} "
                  f"{height_err:>12.5f}")

    if verbose:
        print("-" * 60)
        print(f"  Error constant max(|Err| / dt): {error_constant(results):.3f} m/s")
        if len(results) >= 2:
            print(f"  Observed order (apex error):    {convergence_order(results):.2f}")
        print(f"{'='*60}\n")

    return results


def error_constant(results: Sequence[ConvergenceResult]) -> float:
    """
    Largest |error| / dt over the study.

    For a first-order method this stays bounded as dt shrinks; for the
    drag-free case it is at most about the horizontal speed.
    """
    return max(r.abs_error / r.time_step for r in results)


def convergence_order(results: Sequence[ConvergenceResult],
                      metric: str = 'max_height') -> float:
    """
    Slope of log(error) against log(dt) over the study.

    ``metric`` is 'max_height' (apex error) or 'range' (landing error).
    Runs with zero error are left out of the fit. About 1 for forward Euler.
    """
    if metric == 'max_height':
        pairs = [(r.time_step, r.height_error) for r in results]
    elif metric == 'range':
        pairs = [(r.time_step, r.abs_error) for r in results]
    else:
        raise ValueError(f"Unknown metric '{metric}'. Available: ['max_height', 'range']")
    pairs = [(dt, err) for dt, err in pairs if err > 0]
    if len(pairs) < 2:
        raise ValueError("Need at least two runs with non-zero error to fit an order")
    dts, errs = np.array(pairs).T
    return float(linregress(np.log(dts), np.log(errs)).slope)



def validate_presets(initial_velocity: float = 20.0, launch_angle_deg: float = 45.0,
                     time_step: float = 0.01, max_time: float = 10.0,
                     verbose: bool = True) -> Dict[str, dict]:
    """
    Fly every bird with the same entered speed and angle and compare the
    drag-corrected landing point with its drag-free range.
    """
    rows = {}
    controls = SimulationControls(time_step=time_step, max_time=max_time)

    if verbose:
        print(f"\n{'Bird':<10} {'v0 (m/s)':>9} {'R free (m)':>11} "
              f"{'R drag (m)':>11} {'Loss %':>8} {'Outcome':>10}")
        print("-" * 64)

    for key, bird in ALL_BIRDS.items():
        body = bird.to_body(initial_velocity, launch_angle_deg)
        traj = simulate_euler(body, controls)
        ref = analytic_range(body)
        loss = 100.0 * (ref - traj.range_total) / ref if ref != 0 else float('nan')
        rows[key] = {
            'name': bird.name,
            'velocity': body.initial_velocity,
            'analytic_range': ref,
            'range': traj.range_total,
            'loss_pct': loss,
            'outcome': traj.outcome,
        }
        if verbose:
            print(f"{bird.name:<10} {body.initial_velocity:>9.1f} {ref:>11.2f} "
                  f"{traj.range_total:>11.2f} {loss:>8.1f} {traj.outcome.value:>10}")

    return rows
