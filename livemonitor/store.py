"""Thread-safe storage for the data channels received by the servers."""

from __future__ import annotations

import threading
from collections.abc import Iterable

Point = tuple[float, float]

DEFAULT_CAPACITY = 1000


class DataStore:
    """Named channels of (x, y) points, each holding at most ``capacity`` points."""

    def __init__(self, capacity=DEFAULT_CAPACITY):
        self._lock = threading.Lock()
        self._channels: dict[str, list[Point]] = {}
        self._capacity = 0
        self.capacity = capacity

    @property
    def capacity(self) -> int:
        """Maximum number of points kept per channel by :meth:`append`."""
        with self._lock:
            return self._capacity

    @capacity.setter
    def capacity(self, value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"capacity must be an integer, not {type(value).__name__}")
        if value < 0:
            raise ValueError(f"capacity must not be negative: {value}")
        with self._lock:
            self._capacity = value

    def ensure_channel(self, name: str) -> bool:
        """Create an empty channel unless it exists; return whether it was created."""
        with self._lock:
            if name in self._channels:
                return False
            self._channels[name] = []
            return True

    def _series(self, name: str) -> list[Point]:
        try:
            return self._channels[name]
        except KeyError:
            raise KeyError(f"unknown channel: {name!r}") from None

    def append(self, name: str, point: Point) -> None:
        """Add a point, dropping the oldest points beyond the capacity."""
        x, y = point
        with self._lock:
            series = self._series(name)
            series.append((float(x), float(y)))
            excess = len(series) - self._capacity
            if excess > 0:
                del series[:excess]

    def replace(self, name: str, points: Iterable[Point]) -> None:
        """Replace the whole content of a channel."""
        new_points = [(float(x), float(y)) for x, y in points]
        with self._lock:
            series = self._series(name)
            series[:] = new_points

    def clear(self, name: str) -> None:
        """Remove every point from a channel, keeping the channel itself."""
        with self._lock:
            self._series(name).clear()

    def get(self, name: str) -> list[Point]:
        """Return a copy of the points of a channel."""
        with self._lock:
            return list(self._series(name))

    def channels(self) -> list[str]:
        """Return the channel names in the order they were created."""
        with self._lock:
            return list(self._channels)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._channels

    def __len__(self) -> int:
        with self._lock:
            return len(self._channels)