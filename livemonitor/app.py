"""Live monitor window: channel selection, plot layout and the data servers."""

from __future__ import annotations

import argparse
import asyncio
import logging
import threading
import time
from collections.abc import Awaitable

from livemonitor.graph import GraphParams, draw_graph
from livemonitor.heatmap import HeatmapParams, draw_heatmap
from livemonitor.server import (
    DEFAULT_HOST,
    GRAPH_PORT,
    HEATMAP_PORT,
    serve_graph,
    serve_heatmap,
)
from livemonitor.store import DEFAULT_CAPACITY, DataStore

logger = logging.getLogger(__name__)

VERSION = "0.4.0"
DEFAULT_FRAME_TIME = 30
CAPACITY_STEP = 10

GUIDE_TEXT = f"""\
import math
import socket
import time

with socket.create_connection(("{DEFAULT_HOST}", {GRAPH_PORT})) as sender:
    sender.sendall(b"Sinus\\n")
    time.sleep(0.01)
    t = 0.0
    while True:
        sender.sendall(f"{{t}}\\n{{math.sin(t)}}\\n".encode())
        time.sleep(0.005)
        t += 0.005
"""

_PANEL_BLUE = (0.0, 100 / 255, 180 / 255)
_PANEL_DARK = (0.0, 10 / 255, 18 / 255)


class Monitor:
    """State of the monitor window and the servers feeding it."""

    def __init__(self):
        self.store = DataStore(DEFAULT_CAPACITY)
        self.graph_params: dict[str, GraphParams] = {}
        self.heatmap_params: dict[str, HeatmapParams] = {}
        self.frame_time = DEFAULT_FRAME_TIME
        self.guide_enabled = False
        self.dark = False
        self.host = DEFAULT_HOST
        self.graph_port = GRAPH_PORT
        self.heatmap_port = HEATMAP_PORT
        self.latency = 0.0
        self._selected: set[str] = set()
        self._thread: threading.Thread | None = None

    @property
    def selected(self) -> list[str]:
        """Channels chosen for display, in the order they were created."""
        return [name for name in self.store.channels() if name in self._selected]

    def toggle_channel(self, name: str) -> bool:
        """Show or hide a channel; return whether it is now shown."""
        if name not in self.store:
            raise KeyError(f"unknown channel: {name!r}")
        if name in self._selected:
            self._selected.discard(name)
            return False
        self._selected.add(name)
        return True

    def toggle_guide(self) -> bool:
        """Show or hide the client guide; return whether it is now shown."""
        self.guide_enabled = not self.guide_enabled
        return self.guide_enabled

    def set_capacity(self, value: int) -> int:
        """Set how many points each graph channel keeps; return the new capacity."""
        self.store.capacity = value
        return self.store.capacity

    def start_servers(self) -> threading.Thread:
        """Run the graph and heatmap servers on a background thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("servers are already running")
        thread = threading.Thread(
            target=lambda: asyncio.run(self._run_servers()),
            name="livemonitor-servers",
            daemon=True,
        )
        thread.start()
        self._thread = thread
        return thread

    async def _run_servers(self) -> None:
        await asyncio.gather(
            self._guarded(serve_graph(self.store, self.graph_params, self.host, self.graph_port)),
            self._guarded(
                serve_heatmap(self.store, self.heatmap_params, self.host, self.heatmap_port)
            ),
        )

    @staticmethod
    async def _guarded(server: Awaitable[None]) -> None:
        try:
            await server
        except OSError as exc:
            logger.error("Can't bind: %s", exc)

    def _panels(self) -> list[tuple[str, str]]:
        panels = []
        for name in self.selected:
            if name in self.graph_params:
                panels.append((name, "graph"))
            if name in self.heatmap_params:
                panels.append((name, "heatmap"))
        return panels

    def _side_panel_text(self) -> str:
        lines = [
            "[g] Guide",
            f"Data Capacity: {self.store.capacity}",
            f"Frame Time: {self.frame_time}",
            "Data Channels:",
        ]
        for number, name in enumerate(self.store.channels(), start=1):
            mark = "x" if name in self._selected else " "
            lines.append(f"[{mark}] {number} {name}")
        return "\n".join(lines)

    def render(self, figure) -> list[tuple[str, str]]:
        """Redraw every shown plot onto a matplotlib figure; return ``(name, kind)`` panels."""
        started = time.perf_counter()
        figure.clear()
        figure.patch.set_facecolor("#1b1b1b" if self.dark else "white")

        panels = self._panels()
        rows = len(panels) + (1 if self.guide_enabled else 0)
        for position, (name, kind) in enumerate(panels, start=1):
            ax = figure.add_subplot(rows, 1, position)
            if kind == "graph":
                draw_graph(ax, name, self.store, self.graph_params, self.dark)
            else:
                try:
                    draw_heatmap(ax, name, self.store, self.heatmap_params)
                except ValueError as exc:
                    ax.text(0.1, 0.5, str(exc), fontsize=8)
            ax.set_title(name)

        if self.guide_enabled:
            ax = figure.add_subplot(rows, 1, rows)
            ax.axis("off")
            ax.set_title("Guide")
            ax.text(0.0, 1.0, GUIDE_TEXT, family="monospace", va="top", fontsize=7)

        if rows:
            figure.subplots_adjust(left=0.28, right=0.97, bottom=0.1, top=0.94, hspace=0.6)

        panel_color = _PANEL_DARK if self.dark else _PANEL_BLUE
        figure.text(
            0.01,
            0.97,
            self._side_panel_text(),
            va="top",
            family="monospace",
            fontsize=8,
            color="white",
            bbox={"facecolor": panel_color, "edgecolor": "none"},
        )
        self.latency = time.perf_counter() - started
        figure.text(
            0.01,
            0.01,
            f"Version: {VERSION}   TCP: {self.host}:{self.graph_port}   "
            f"Latency: {self.latency * 1000:.2f} ms",
            fontsize=8,
            color="grey",
        )
        return panels

    def _handle_key(self, key: str | None) -> None:
        if key == "g":
            self.toggle_guide()
        elif key == "+":
            self.set_capacity(self.store.capacity + CAPACITY_STEP)
        elif key == "-":
            self.set_capacity(max(0, self.store.capacity - CAPACITY_STEP))
        elif key is not None and key.isdigit() and key != "0":
            channels = self.store.channels()
            index = int(key) - 1
            if index < len(channels):
                self.toggle_channel(channels[index])


def main(argv=None) -> int:
    """Open the monitor window and start the servers."""
    parser = argparse.ArgumentParser(prog="livemonitor", description="Plot live data sent over TCP.")
    parser.add_argument("--capacity", type=int, default=DEFAULT_CAPACITY,
                        help="points kept per graph channel")
    parser.add_argument("--frame-time", type=int, default=DEFAULT_FRAME_TIME,
                        help="milliseconds between redraws")
    parser.add_argument("--dark", action="store_true", help="use dark colours")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    monitor = Monitor()
    try:
        monitor.set_capacity(args.capacity)
    except ValueError as exc:
        parser.error(str(exc))
    monitor.frame_time = max(1, args.frame_time)
    monitor.dark = args.dark
    monitor.start_servers()

    import matplotlib.pyplot as plt
    from matplotlib.animation import FuncAnimation

    figure = plt.figure("Monitor", figsize=(10, 7))
    figure.canvas.mpl_connect("key_press_event", lambda event: monitor._handle_key(event.key))
    animation = FuncAnimation(
        figure,
        lambda _frame: monitor.render(figure),
        interval=monitor.frame_time,
        cache_frame_data=False,
    )
    plt.show()
    del animation
    return 0


if __name__ == "__main__":
    raise SystemExit(main())