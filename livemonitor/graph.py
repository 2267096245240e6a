"""Parameters and drawing of line and scatter graphs for a data channel."""

from __future__ import annotations

import colorsys
import math
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum

from livemonitor.store import DataStore, Point

UNSELECTED = "Unselected"
OVERLAY_SLOTS = 4

_GREY = "#9e9e9e"
_MARKER_RADIUS = 2


class PlotMode(Enum):
    """How the points of a channel are drawn."""

    SCATTER = "Scatter"
    LINE = "Line"

    def __str__(self) -> str:
        return self.value


@dataclass
class GraphParams:
    """View settings of one graph window."""

    settings: bool = False
    legend: bool = False
    x_min: float = 0.0
    x_max: float = 0.0
    x_rescale: bool = True
    y_min: float = 0.0
    y_max: float = 0.0
    y_rescale: bool = True
    addplots: list[int] = field(default_factory=lambda: [0] * OVERLAY_SLOTS)
    plot_mode: PlotMode = PlotMode.LINE

    def update_ranges(self, points: Sequence[Point]) -> None:
        """Fit the axis ranges to the points, or only widen them when rescaling is off."""
        if not points:
            return
        (x_lo, x_hi), (y_lo, y_hi) = data_bounds(points)
        if self.x_rescale:
            self.x_min, self.x_max = x_lo, x_hi
        else:
            self.x_min = min(self.x_min, x_lo)
            self.x_max = max(self.x_max, x_hi)
        if self.y_rescale:
            self.y_min, self.y_max = y_lo, y_hi
        else:
            self.y_min = min(self.y_min, y_lo)
            self.y_max = max(self.y_max, y_hi)

    def toggle_settings(self) -> bool:
        """Flip the settings window flag and return the new state."""
        self.settings = not self.settings
        return self.settings

    def toggle_legend(self) -> bool:
        """Flip the legend flag and return the new state."""
        self.legend = not self.legend
        return self.legend


def data_bounds(points: Iterable[Point]) -> tuple[tuple[float, float], tuple[float, float]]:
    """Return ``((x_min, x_max), (y_min, y_max))``; empty input gives infinite bounds."""
    x_lo, x_hi = math.inf, -math.inf
    y_lo, y_hi = math.inf, -math.inf
    for x, y in points:
        x_lo, x_hi = min(x_lo, x), max(x_hi, x)
        y_lo, y_hi = min(y_lo, y), max(y_hi, y)
    return (x_lo, x_hi), (y_lo, y_hi)


def other_keys(key: str, keys: Iterable[str]) -> list[str]:
    """Return the overlay choices: the placeholder followed by every other channel."""
    return [UNSELECTED, *(k for k in keys if k != key)]


def series_color(index: float, count: float) -> tuple[float, float, float]:
    """Return an RGB colour from a cyclic hue map for position ``index / count``."""
    if count <= 0:
        raise ValueError(f"count must be positive: {count}")
    value = min(max(index / count, 0.0), 1.0)
    hue = (5.0 * value) % 1.0
    return colorsys.hls_to_rgb(hue, 0.5, 1.0)


def overlay_channels(
    params: GraphParams,
    key: str,
    keys: Iterable[str],
    registry: Mapping[str, GraphParams],
) -> list[tuple[int, str]]:
    """Return ``(index, name)`` for each overlay slot that names a graph channel."""
    choices = other_keys(key, keys)
    selected = ((index, choices[index]) for index in params.addplots)
    return [(index, name) for index, name in selected if name in registry]


def _draw_series(ax, points: Sequence[Point], mode: PlotMode, color, label: str) -> None:
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    if mode is PlotMode.SCATTER:
        ax.scatter(xs, ys, s=(2 * _MARKER_RADIUS) ** 2, color=color, label=label)
    else:
        ax.plot(xs, ys, color=color, label=label)


def _style_axes(ax, dark: bool) -> None:
    foreground = _GREY if dark else "black"
    ax.tick_params(colors=foreground, labelsize=10)
    for spine in ax.spines.values():
        spine.set_color(foreground)
    ax.grid(True, color=foreground, alpha=0.3)


def draw_graph(
    ax,
    key: str,
    store: DataStore,
    registry: Mapping[str, GraphParams],
    dark: bool,
) -> list[str]:
    """Draw a channel and its overlays onto a matplotlib axes; return the drawn labels."""
    points = store.get(key)
    params = registry[key]
    if points:
        params.update_ranges(points)

    ax.clear()
    _style_axes(ax, dark)
    if params.x_min < params.x_max:
        ax.set_xlim(params.x_min, params.x_max)
    if params.y_min < params.y_max:
        ax.set_ylim(params.y_min, params.y_max)

    count = len(store)
    _draw_series(ax, points, params.plot_mode, series_color(0, count), key)
    drawn = [key]

    for index, name in overlay_channels(params, key, store.channels(), registry):
        if name not in store:
            continue
        _draw_series(
            ax,
            store.get(name),
            registry[name].plot_mode,
            series_color(index, count),
            name,
        )
        drawn.append(name)

    if params.legend:
        ax.legend(loc="upper right")
    return drawn