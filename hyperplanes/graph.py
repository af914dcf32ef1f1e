"""
Graph builder for two-unknown systems.

Produces a matplotlib Figure showing every equation of a 2-D system as a
line in the (x_0, x_1) plane, with the intersection point marked when the
solution is unique. Systems of any other dimension are not graphable.
"""

import logging
from typing import Optional

import numpy as np
from matplotlib.figure import Figure

from hyperplanes.config import get_settings
from hyperplanes.linear_system import (
    InfiniteSolutions, LinearSystem, NoSolution, Solution, UniqueSolution,
)
from hyperplanes.rounding import fmt_num, round_factory
from hyperplanes.tolerance import is_zero

logger = logging.getLogger(__name__)

# ── palette ────────────────────────────────────────────────────────────────
_DARK_GRAPH = {
    "C_BG":    "#0f0f0f",
    "C_AX":    "#181818",
    "C_GRID":  "#252525",
    "C_TICK":  "#666666",
    "C_SPINE": "#333333",
    "C_DOT":   "#4caf50",   # solution dot
    "C_TEXT":  "#cccccc",
    "C_LEGEND": "#1e1e1e",
}
_LIGHT_GRAPH = {
    "C_BG":    "#ffffff",
    "C_AX":    "#f7f7f7",
    "C_GRID":  "#dddddd",
    "C_TICK":  "#555555",
    "C_SPINE": "#bbbbbb",
    "C_DOT":   "#2e7d32",
    "C_TEXT":  "#222222",
    "C_LEGEND": "#ffffff",
}
_THEMES = {"dark": _DARK_GRAPH, "light": _LIGHT_GRAPH}

# One colour per equation, cycled.
LINE_COLOURS = ("#1a8cff", "#ff8c42", "#e040fb", "#ffd54f", "#26c6da")

# Filled from the graph_theme setting on first use.
_palette: dict = {}


def set_theme(name: str) -> None:
    """Switch the palette used by figures built afterwards ("dark" or "light")."""
    if name not in _THEMES:
        raise ValueError(f"Unknown theme '{name}'. Choose 'dark' or 'light'.")
    _palette.update(_THEMES[name])


def current_palette() -> dict:
    if not _palette:
        set_theme(get_settings()["graph_theme"])
    return dict(_palette)


def _style_axes(ax, fig):
    fig.patch.set_facecolor(_palette["C_BG"])
    ax.set_facecolor(_palette["C_AX"])
    ax.tick_params(colors=_palette["C_TICK"], labelsize=9)
    ax.xaxis.label.set_color(_palette["C_TEXT"])
    ax.yaxis.label.set_color(_palette["C_TEXT"])
    ax.title.set_color(_palette["C_TEXT"])
    for spine in ax.spines.values():
        spine.set_edgecolor(_palette["C_SPINE"])
    ax.grid(True, color=_palette["C_GRID"], linewidth=0.8, linestyle="--", alpha=0.7)
    ax.axhline(0, color=_palette["C_SPINE"], linewidth=0.8)
    ax.axvline(0, color=_palette["C_SPINE"], linewidth=0.8)


def _point_label(point) -> str:
    round_ = round_factory(get_settings()["display_precision"])
    return "(" + ", ".join(fmt_num(round_(c)) for c in point) + ")"


def _title_for(solution: Solution) -> str:
    if isinstance(solution, UniqueSolution):
        return f"One solution at {_point_label(solution.point)}"
    if isinstance(solution, NoSolution):
        return "No solution: the lines never share a common point"
    if isinstance(solution, InfiniteSolutions):
        return "Infinitely many solutions: at least one unknown is free"
    raise TypeError(f"Unexpected solution type: {type(solution).__name__}")


def _centre(system: LinearSystem, solution: Solution):
    if isinstance(solution, UniqueSolution):
        return solution.point[0], solution.point[1]
    points = [row.base_point for row in system if row.base_point is not None]
    if not points:
        return 0.0, 0.0
    return (float(np.mean([p[0] for p in points])),
            float(np.mean([p[1] for p in points])))


def build_figure(system: LinearSystem,
                 solution: Optional[Solution] = None) -> Optional[Figure]:
    """
    Build and return a themed matplotlib Figure for a 2-D *system*.
    Returns None when the system is not two-dimensional.
    *solution* defaults to ``system.compute_solution()``.
    """
    if system.dim != 2:
        logger.debug("Not graphing a system of dimension %d", system.dim)
        return None
    if solution is None:
        solution = system.compute_solution()
    current_palette()

    cx, cy = _centre(system, solution)
    x_range = np.linspace(cx - 8, cx + 8, 400)

    fig = Figure(figsize=(7, 3.8), dpi=100)
    ax = fig.add_subplot(111)
    _style_axes(ax, fig)

    for i, row in enumerate(system):
        if row.base_point is None:
            continue  # "0 = c" has no line to draw
        colour = LINE_COLOURS[i % len(LINE_COLOURS)]
        a, b = row.normal_vector
        c = row.constant_term
        if is_zero(b):
            ax.axvline(c / a, color=colour, linewidth=2, label=str(row))
        else:
            ax.plot(x_range, (c - a * x_range) / b, color=colour,
                    linewidth=2, label=str(row))

    if isinstance(solution, UniqueSolution):
        sx, sy = solution.point
        ax.scatter([sx], [sy], color=_palette["C_DOT"], s=90, zorder=5,
                   label=f"Intersection: {_point_label(solution.point)}")

    ax.set_title(_title_for(solution), color=_palette["C_TEXT"], fontsize=9)
    ax.set_xlabel("x_0", color=_palette["C_TEXT"])
    ax.set_ylabel("x_1", color=_palette["C_TEXT"])
    ax.set_xlim(x_range[0], x_range[-1])
    ax.set_ylim(cy - 8, cy + 8)

    if ax.get_legend_handles_labels()[0]:
        ax.legend(fontsize=8, facecolor=_palette["C_LEGEND"],
                  edgecolor=_palette["C_SPINE"], labelcolor=_palette["C_TEXT"])
    fig.tight_layout(pad=1.2)
    return fig
