"""
Visualization Engine
====================
Plots for trajectory analysis:
  1. Trajectory (height vs distance) with the wall and the impact point
  2. Bird comparison (all presets, same launch)
  3. Convergence of the Euler landing point against the reference
  4. Animated flight towards the wall (saved as GIF)
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from typing import Dict, List, Optional, Sequence
import math
import os

from .integrator import TrajectoryResult
from .presets import ALL_BIRDS
from .projectile import analytic_range
from .validation import ConvergenceResult


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'wall_color': '#8d6e63',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
}

WALL_WIDTH = 0.5    # m, drawn thickness of the wall


def style_axes(ax):
    """Dark theme for one axes. Label text keeps the theme colour when set later."""
    ax.set_facecolor(STYLE['bg_color'])
    ax.tick_params(colors=STYLE['text_color'])
    for label in (ax.xaxis.label, ax.yaxis.label, ax.title):
        label.set_color(STYLE['text_color'])
    ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
    for spine in ax.spines.values():
        spine.set_color(STYLE['grid_color'])


def style_figure(fig, ax):
    fig.patch.set_facecolor(STYLE['bg_color'])
    style_axes(ax)


def _legend(ax, **kwargs):
    ax.legend(facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'], **kwargs)


def _ensure_parent(path: str):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def save_figure(fig, save_path: str) -> str:
    """Write ``fig`` on the dark background, creating missing directories."""
    _ensure_parent(save_path)
    fig.savefig(save_path, dpi=150, bbox_inches='tight',
                facecolor=STYLE['bg_color'])
    return save_path


def _wall_distance(result: TrajectoryResult) -> Optional[float]:
    wall = result.controls.obstacle_distance
    return wall if math.isfinite(wall) else None


def draw_wall(ax, distance: float, height: float):
    """Filled rectangle from the ground up to ``height`` at ``distance``."""
    ax.fill_between([distance, distance + WALL_WIDTH], 0, height,
                    color=STYLE['wall_color'], alpha=0.9, label='Wall', zorder=3)


def _plot_limits(result: TrajectoryResult):
    x_max = max(float(np.max(result.x)), 1.0)
    y_max = max(result.max_height, 1.0)
    wall = _wall_distance(result)
    if wall is not None:
        x_max = max(x_max, wall + WALL_WIDTH)
    return x_max * 1.05, y_max * 1.2


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: TrajectoryResult, save_path: str = None,
                    show: bool = False, color: str = None,
                    label: str = None) -> plt.Figure:
    """Height vs distance for a single run, with the wall if there is one."""
    fig, ax = plt.subplots(figsize=(12, 6))
    style_figure(fig, ax)

    color = color or STYLE['accent_colors'][0]
    ax.plot(result.x, result.y, color=color, linewidth=2.5,
            label=label or 'Trajectory (with drag)')

    ax.plot(0, 0, 'o', color='#00e676', markersize=10, label='Launch', zorder=5)

    x_lim, y_lim = _plot_limits(result)
    wall = _wall_distance(result)
    if wall is not None:
        draw_wall(ax, wall, y_lim)

    final = result.final_sample
    if result.collided:
        ax.plot(final.x, final.y, '*', color='#ff5252', markersize=16,
                label='Wall hit', zorder=6)
    else:
        ax.plot(final.x, final.y, 'x', color='#ff5252', markersize=12,
                markeredgewidth=3,
                label='Landing' if result.landed else 'Timeout', zorder=5)

    idx_max = int(np.argmax(result.y))
    ax.plot(result.x[idx_max], result.y[idx_max], '^',
            color='#ffeb3b', markersize=10, label='Apex', zorder=5)

    body = result.body
    ax.axvline(analytic_range(body), color='#888', linestyle='--', alpha=0.6,
               label='Range without drag')

    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title(f'Flight path (v₀={body.initial_velocity:.1f} m/s, '
                 f'θ={body.launch_angle_deg:.0f}°, dt={result.controls.time_step:g} s)',
                 fontsize=13, fontweight='bold')
    _legend(ax, loc='upper right', fontsize=10)
    ax.set_xlim(0, x_lim)
    ax.set_ylim(0, y_lim)

    plt.tight_layout()
    if save_path:
        save_figure(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Bird Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_bird_comparison(results: Dict[str, TrajectoryResult],
                         save_path: str = None) -> plt.Figure:
    """Trajectories of several birds on shared axes, keyed by catalog key."""
    fig, ax = plt.subplots(figsize=(12, 6))
    style_figure(fig, ax)

    for i, (key, res) in enumerate(results.items()):
        bird = ALL_BIRDS.get(key)
        color = bird.color if bird else STYLE['accent_colors'][i % len(STYLE['accent_colors'])]
        name = bird.name if bird else key
        ax.plot(res.x, res.y, color=color, linewidth=2,
                label=f"{name} (R={res.range_total:.1f} m)")

    ax.set_xlabel('Distance (m)')
    ax.set_ylabel('Height (m)')
    ax.set_title('Bird Comparison (same launch)', fontweight='bold')
    _legend(ax, fontsize=10)
    ax.set_xlim(left=0)
    ax.set_ylim(bottom=0)

    plt.tight_layout()
    if save_path:
        save_figure(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Convergence
# ══════════════════════════════════════════════════════════════════════════

def plot_convergence(results: Sequence[ConvergenceResult],
                     save_path: str = None) -> plt.Figure:
    """Landing and apex error vs timestep on log-log axes with a first-order guide."""
    fig, ax = plt.subplots(figsize=(8, 6))
    style_figure(fig, ax)

    dts = np.array([r.time_step for r in results])
    errs = np.array([r.abs_error for r in results])
    heights = np.array([r.height_error for r in results])

    ax.loglog(dts, errs, 'o-', color=STYLE['accent_colors'][0], linewidth=2,
              markersize=8, label='Landing |error|')
    ax.loglog(dts, heights, 's-', color=STYLE['accent_colors'][1], linewidth=2,
              markersize=7, label='Apex |error|')
    # first-order guide through the largest step
    ax.loglog(dts, errs[0] * dts / dts[0], '--', color='#888',
              label='O(dt) guide')

    ax.set_xlabel('Timestep dt (s)')
    ax.set_ylabel('Error (m)')
    ax.set_title('Euler Convergence', fontweight='bold')
    _legend(ax, fontsize=10)

    plt.tight_layout()
    if save_path:
        save_figure(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Animation
# ══════════════════════════════════════════════════════════════════════════

def playback_indices(n_samples: int, frames: Optional[int] = None) -> List[int]:
    """
    Sample indices shown by the animation, one per frame.

    Every sample when ``frames`` is None, otherwise an even subsample that
    always ends on the last sample.
    """
    if n_samples == 0:
        return []
    step = 1 if frames is None else max(1, n_samples // frames)
    indices = list(range(0, n_samples, step))
    if indices[-1] != n_samples - 1:
        indices.append(n_samples - 1)
    return indices


def create_trajectory_animation(result: TrajectoryResult,
                                save_path: str = 'outputs/trajectory_anim.gif',
                                frames: Optional[int] = 100,
                                interval_ms: int = 50,
                                color: str = None) -> str:
    """Create animated GIF of the flight with trail, wall and impact message."""
    from matplotlib.animation import FuncAnimation, PillowWriter

    fig, ax = plt.subplots(figsize=(12, 6))
    style_figure(fig, ax)

    x = result.x
    y = result.y
    t = result.time
    x_lim, y_lim = _plot_limits(result)
    ax.set_xlim(0, x_lim)
    ax.set_ylim(0, y_lim)
    ax.set_xlabel('Distance (m)', fontsize=12)
    ax.set_ylabel('Height (m)', fontsize=12)
    ax.set_title('Flight Animation', fontsize=14, fontweight='bold')

    wall = _wall_distance(result)
    if wall is not None:
        draw_wall(ax, wall, y_lim)

    color = color or STYLE['accent_colors'][0]
    trail_line, = ax.plot([], [], color=color, linewidth=1.5, alpha=0.6)
    point, = ax.plot([], [], 'o', color=color, markersize=10)
    info_text = ax.text(0.02, 0.95, '', transform=ax.transAxes,
                        color=STYLE['text_color'], fontsize=11, fontfamily='monospace')

    indices = playback_indices(len(x), frames)

    def animate(frame_idx):
        idx = indices[min(frame_idx, len(indices) - 1)]
        trail_line.set_data(x[:idx+1], y[:idx+1])
        point.set_data([x[idx]], [y[idx]])
        text = f't={t[idx]:.2f}s | X={x[idx]:.2f} m | Y={y[idx]:.2f} m'
        if idx == len(x) - 1:
            if result.collided:
                text += ' | WALL COLLISION'
            elif result.landed:
                text += ' | LANDED'
        info_text.set_text(text)
        return trail_line, point, info_text

    _ensure_parent(save_path)
    anim = FuncAnimation(fig, animate, frames=len(indices),
                         interval=interval_ms, blit=True)
    anim.save(save_path, writer=PillowWriter(fps=max(1, 1000 // interval_ms)),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    print(f"  Animation saved: {save_path}")
    return save_path
