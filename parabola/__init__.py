"""
Parabola Flight Simulator
=========================
Projectile motion with quadratic air drag, integrated with a fixed-step
explicit Euler scheme:
  - Gravity
  - Quadratic aerodynamic drag (constant Cd, constant air density)
  - A vertical wall at a chosen distance (collision detection)
  - Landing detection with linear correction onto the ground

A small catalog of bird presets supplies the physical parameters; the
results can be listed as text, plotted, animated, or flown in a Tk window
(``parabola.gui``, imported separately because it needs tkinter).
"""

from .projectile import (
    ProjectileBody, GRAVITY, analytic_range, analytic_max_height,
    analytic_flight_time, compute_acceleration,
)
from .drag_model import drag_force, drag_magnitude, SPHERE_DRAG_COEFFICIENT
from .integrator import (
    simulate_euler, SimulationControls, TrajectoryResult, TrajectorySample,
    ObstacleCollision, Landed, Outcome,
)
from .presets import BirdPreset, ALL_BIRDS, get_preset
from .inputs import parse_launch_inputs, LaunchInput, InputError
from .reporting import trajectory_report, render_report
from .validation import (
    convergence_study, convergence_order, error_constant, reference_range,
    reference_flight, validate_presets, ConvergenceResult,
)
from .visualization import (
    plot_trajectory, plot_bird_comparison, plot_convergence,
    create_trajectory_animation,
)

__version__ = "1.0.0"
__all__ = [
    'ProjectileBody', 'GRAVITY', 'analytic_range', 'analytic_max_height',
    'analytic_flight_time', 'compute_acceleration',
    'drag_force', 'drag_magnitude', 'SPHERE_DRAG_COEFFICIENT',
    'simulate_euler', 'SimulationControls', 'TrajectoryResult',
    'TrajectorySample', 'ObstacleCollision', 'Landed', 'Outcome',
    'BirdPreset', 'ALL_BIRDS', 'get_preset',
    'parse_launch_inputs', 'LaunchInput', 'InputError',
    'trajectory_report', 'render_report',
    'convergence_study', 'convergence_order', 'error_constant',
    'reference_range', 'reference_flight', 'validate_presets',
    'ConvergenceResult',
    'plot_trajectory', 'plot_bird_comparison', 'plot_convergence',
    'create_trajectory_animation',
]
