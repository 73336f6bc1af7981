"""
Launch Window
=============
Tk desktop front-end: pick a bird, enter launch speed, angle and wall
distance, then watch the precomputed flight replayed on an embedded
matplotlib canvas while the text report fills the output box.

Playback runs on the Tk timer (one sample per PLAYBACK_INTERVAL_MS),
independent of the simulated timestep.
"""

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from tkinter.scrolledtext import ScrolledText

from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from .inputs import parse_launch_inputs, InputError
from .integrator import simulate_euler, SimulationControls
from .presets import ALL_BIRDS
from .reporting import trajectory_report, format_collision
from .visualization import WALL_WIDTH, draw_wall, style_figure


logger = logging.getLogger(__name__)

PLAYBACK_INTERVAL_MS = 10


class LaunchApp:
    """Main application window."""

    def __init__(self, root: tk.Tk, controls: SimulationControls = None):
        self.root = root
        self.root.title("Parabola Flight Simulator")
        self.root.geometry("1200x700")

        # wall distance is taken from the form on each launch
        self.base_controls = controls or SimulationControls()
        self.result = None
        self._playback_job = None
        self._playback_idx = 0

        self.build_ui()

    # ── layout ────────────────────────────────────────────────────────────
    def build_ui(self):
        panel = ttk.Frame(self.root, padding=10)
        panel.pack(side=tk.LEFT, fill=tk.Y)

        ttk.Label(panel, text="Bird").grid(row=0, column=0, sticky='w', pady=2)
        self.bird_var = tk.StringVar()
        self.bird_box = ttk.Combobox(panel, textvariable=self.bird_var,
                                     state='readonly', width=14,
                                     values=[b.name for b in ALL_BIRDS.values()])
        self.bird_box.current(0)
        self.bird_box.grid(row=0, column=1, sticky='w', pady=2)

        self.velocity_var = tk.StringVar(value="20")
        self.angle_var = tk.StringVar(value="45")
        self.wall_var = tk.StringVar(value="30")
        fields = [
            ("Initial velocity (m/s)", self.velocity_var),
            ("Launch angle (°)", self.angle_var),
            ("Wall distance (m)", self.wall_var),
        ]
        for row, (label, var) in enumerate(fields, start=1):
            ttk.Label(panel, text=label).grid(row=row, column=0, sticky='w', pady=2)
            ttk.Entry(panel, textvariable=var, width=16).grid(row=row, column=1, pady=2)

        ttk.Button(panel, text="Start flight", command=self.start_flight).grid(
            row=4, column=0, columnspan=2, pady=(10, 10), sticky='ew')

        self.output = ScrolledText(panel, width=46, height=30, font=('Courier', 9))
        self.output.grid(row=5, column=0, columnspan=2, sticky='nsew')
        panel.rowconfigure(5, weight=1)

        self.fig = Figure(figsize=(8, 6))
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, self.root)
        self.canvas.get_tk_widget().pack(side=tk.RIGHT, fill=tk.BOTH, expand=True)
        self._style_axes()
        self.canvas.draw()

    def _style_axes(self):
        style_figure(self.fig, self.ax)
        self.ax.set_xlabel('Distance (m)')
        self.ax.set_ylabel('Height (m)')

    # ── actions ───────────────────────────────────────────────────────────
    def selected_bird(self):
        return list(ALL_BIRDS.values())[self.bird_box.current()]

    def append_output(self, text: str):
        self.output.insert(tk.END, text + '\n')
        self.output.see(tk.END)

    def start_flight(self):
        self.stop_playback()
        self.output.delete('1.0', tk.END)

        try:
            launch = parse_launch_inputs(self.velocity_var.get(),
                                         self.angle_var.get(),
                                         self.wall_var.get())
        except InputError as e:
            messagebox.showerror("Input error", str(e))
            return

        bird = self.selected_bird()
        body = bird.to_body(launch.velocity, launch.angle_deg)
        controls = SimulationControls(
            time_step=self.base_controls.time_step,
            max_time=self.base_controls.max_time,
            obstacle_distance=launch.wall_distance,
        )
        self.result = simulate_euler(body, controls)
        logger.info("%s bird launched: %s", bird.name, self.result.outcome.value)

        for line in trajectory_report(self.result):
            self.append_output(line)

        self._prepare_canvas(bird.color)
        self._playback_idx = 0
        self._step_playback()

    def _prepare_canvas(self, color: str):
        self.ax.clear()
        self._style_axes()
        res = self.result
        wall = res.controls.obstacle_distance
        x_max = max(float(res.x.max()), wall + WALL_WIDTH, 1.0) * 1.05
        y_max = max(res.max_height, 1.0) * 1.2
        draw_wall(self.ax, wall, y_max)
        self.ax.set_xlim(0, x_max)
        self.ax.set_ylim(0, y_max)
        self._xs, self._ys = res.x, res.y
        self.trail, = self.ax.plot([], [], color=color, linewidth=1.5, alpha=0.7)
        self.point, = self.ax.plot([], [], 'o', color=color, markersize=10)
        self.canvas.draw()

    def _step_playback(self):
        res = self.result
        idx = self._playback_idx
        x, y = self._xs, self._ys
        self.trail.set_data(x[:idx+1], y[:idx+1])
        self.point.set_data([x[idx]], [y[idx]])
        self.canvas.draw_idle()

        if idx < len(res.samples) - 1:
            self._playback_idx += 1
            self._playback_job = self.root.after(PLAYBACK_INTERVAL_MS, self._step_playback)
            return

        self._playback_job = None
        if res.collided:
            messagebox.showinfo("Collision", format_collision(res.event))

    def stop_playback(self):
        if self._playback_job is not None:
            self.root.after_cancel(self._playback_job)
            self._playback_job = None


def run_gui(controls: SimulationControls = None):
    """Open the launch window and block until it is closed."""
    root = tk.Tk()
    app = LaunchApp(root, controls)

    def on_closing():
        app.stop_playback()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_closing)
    root.mainloop()
