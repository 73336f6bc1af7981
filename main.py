#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  PARABOLA FLIGHT SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Flies one bird and prints the text report:
    1. Drag-free range estimate
    2. Drag-corrected trajectory (Euler) with wall collision / landing
    3. Optional plot and animated GIF of the flight
    4. Optional validation (convergence + bird comparison)

  Usage:
    python main.py --velocity 20 --angle 45 --wall 30
    python main.py --bird yellow --plot outputs/flight.png --animate outputs/flight.gif
    python main.py --validate
    python main.py --gui
═══════════════════════════════════════════════════════════════════════════════
"""

import argparse
import logging
import sys
import time

from parabola.inputs import parse_launch_inputs, InputError
from parabola.integrator import simulate_euler, SimulationControls
from parabola.presets import ALL_BIRDS, get_preset
from parabola.projectile import ProjectileBody
from parabola.reporting import render_report
from parabola.validation import convergence_study, convergence_order, validate_presets
from parabola.visualization import (
    plot_trajectory, plot_convergence, plot_bird_comparison,
    create_trajectory_animation,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Projectile flight with quadratic air drag and a wall.")
    parser.add_argument('--velocity', default='20', help="initial velocity (m/s)")
    parser.add_argument('--angle', default='45', help="launch angle, 0-90 (deg)")
    parser.add_argument('--wall', default='30', help="wall distance (m)")
    parser.add_argument('--bird', default='regular', choices=list(ALL_BIRDS),
                        help="bird preset")
    parser.add_argument('--dt', type=float, default=0.01, help="timestep (s)")
    parser.add_argument('--max-time', type=float, default=10.0,
                        help="simulation time limit (s)")
    parser.add_argument('--plot', metavar='PATH', help="save trajectory plot")
    parser.add_argument('--animate', metavar='PATH', help="save flight animation GIF")
    parser.add_argument('--summary-only', action='store_true',
                        help="skip the per-sample listing")
    parser.add_argument('--validate', action='store_true',
                        help="run the convergence study and bird comparison")
    parser.add_argument('--gui', action='store_true', help="open the launch window")
    parser.add_argument('-v', '--verbose', action='store_true', help="debug logging")
    return parser


def run_validation(args, out: str = 'outputs'):
    """Convergence studies and bird comparison; figures go under ``out``."""
    section("Convergence: drag-free Euler vs analytic range")
    body = ProjectileBody(initial_velocity=20.0, launch_angle_deg=45.0, mass=1.0)
    results = convergence_study(body, verbose=True)
    print(f"  Fitted order (apex error): {convergence_order(results):.2f}"
          f" | (landing error): {convergence_order(results, metric='range'):.2f}")
    fig = plot_convergence(results, save_path=f'{out}/convergence_no_drag.png')
    plt.close(fig)
    print(f"  ✓ Saved: {out}/convergence_no_drag.png")

    section("Convergence: Euler with drag vs RK45 reference")
    convergence_study(get_preset('regular').to_body(20.0, 45.0),
                      with_drag=True, verbose=True)

    section("Bird comparison")
    validate_presets(time_step=args.dt, max_time=args.max_time)
    controls = SimulationControls(time_step=args.dt, max_time=args.max_time)
    flights = {key: simulate_euler(bird.to_body(20.0, 45.0), controls)
               for key, bird in ALL_BIRDS.items()}
    fig = plot_bird_comparison(flights, save_path=f'{out}/bird_comparison.png')
    plt.close(fig)
    print(f"\n  ✓ Saved: {out}/bird_comparison.png")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        controls = SimulationControls(time_step=args.dt, max_time=args.max_time)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.gui:
        from parabola.gui import run_gui
        run_gui(controls)
        return 0

    if args.validate:
        start_time = time.time()
        run_validation(args)
        section("COMPLETE")
        print(f"  Total runtime: {time.time() - start_time:.1f} seconds")
        return 0

    try:
        launch = parse_launch_inputs(args.velocity, args.angle, args.wall)
    except InputError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    bird = get_preset(args.bird)
    body = bird.to_body(launch.velocity, launch.angle_deg)
    controls = SimulationControls(time_step=args.dt, max_time=args.max_time,
                                  obstacle_distance=launch.wall_distance)
    result = simulate_euler(body, controls)

    section(f"{bird.name} bird")
    print(result.summary())
    print()
    print(render_report(result, include_samples=not args.summary_only))

    if args.plot:
        fig = plot_trajectory(result, save_path=args.plot, color=bird.color,
                              label=f'{bird.name} bird')
        plt.close(fig)
        print(f"\n  ✓ Saved: {args.plot}")
    if args.animate:
        create_trajectory_animation(result, save_path=args.animate,
                                    color=bird.color)
    return 0


if __name__ == "__main__":
    sys.exit(main())
