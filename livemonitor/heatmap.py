"""Parameters and drawing of heatmaps built from a data channel."""

from __future__ import annotations

import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from matplotlib.patches import Rectangle

from livemonitor.graph import series_color
from livemonitor.store import DataStore, Point

DEFAULT_X_NUM = 5
DEFAULT_Y_NUM = 10

_VIEW_WIDTH = 5
_VIEW_HEIGHT = 10


def _bound(data_len: int, divisor: int) -> int:
    """Largest size allowed for one side, saturating like a float-to-unsigned cast."""
    if divisor == 0:
        return 0 if data_len == 0 else sys.maxsize
    return max(0, int(data_len / divisor))


@dataclass
class HeatmapParams:
    """View settings of one heatmap window."""

    settings: bool = False
    legend: bool = False
    x_num: int = DEFAULT_X_NUM
    y_num: int = DEFAULT_Y_NUM

    def limits(self, data_len: int) -> tuple[int, int]:
        """Return the largest ``x_num`` and ``y_num`` the data length allows."""
        return _bound(data_len, self.y_num), _bound(data_len, self.x_num)

    def toggle_settings(self) -> bool:
        """Flip the settings window flag and return the new state."""
        self.settings = not self.settings
        return self.settings


def build_matrix(points: Sequence[Point], x_num: int, y_num: int) -> list[list[float]]:
    """Arrange the x values of the points row by row into ``y_num`` rows of ``x_num``."""
    width = max(0, x_num)
    height = max(0, y_num)
    needed = width * height
    if len(points) < needed:
        raise ValueError(
            f"{width}x{height} heatmap needs {needed} points, channel has {len(points)}"
        )
    values = [x for x, _ in points[:needed]]
    return [values[row * width:(row + 1) * width] for row in range(height)]


def draw_heatmap(
    ax,
    key: str,
    store: DataStore,
    registry: Mapping[str, HeatmapParams],
) -> list[list[float]]:
    """Draw a channel as coloured cells onto a matplotlib axes; return the matrix drawn."""
    params = registry[key]
    ax.clear()
    ax.set_xlim(0, _VIEW_WIDTH)
    ax.set_ylim(0, _VIEW_HEIGHT)
    if key not in store:
        return []
    matrix = build_matrix(store.get(key), params.x_num, params.y_num)
    # The first grid row stays empty; data rows start one cell up.
    for y, row in enumerate(matrix, start=1):
        for x, value in enumerate(row):
            ax.add_patch(
                Rectangle((x, y), 1, 1, facecolor=series_color(value, 1.0), edgecolor="none")
            )
    return matrix