"""TCP servers that feed line-based channel data into a :class:`DataStore`."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, MutableMapping
from enum import Enum, auto

from livemonitor.graph import GraphParams
from livemonitor.heatmap import HeatmapParams
from livemonitor.store import DataStore, Point

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
GRAPH_PORT = 7800
HEATMAP_PORT = 7810
DEFAULT_FRAME_LENGTH = 50
_INITIAL_NAME = "temp"


def _parse_float(text: str) -> float:
    if "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


def _parse_int(text: str) -> int:
    if "_" in text:
        raise ValueError(f"invalid integer literal: {text!r}")
    return int(text)


class _GraphStage(Enum):
    NAME = auto()
    X = auto()
    Y = auto()


class GraphSession:
    """Protocol state of one graph connection: a name line, then x and y lines in turn."""

    def __init__(self, store: DataStore, registry: MutableMapping[str, GraphParams]):
        self.store = store
        self.registry = registry
        self.name = _INITIAL_NAME
        self._stage = _GraphStage.NAME
        self._x = 0.0
        self._y = 0.0

    def feed_line(self, line: str) -> None:
        """Handle one received line."""
        text = line.strip()
        if self._stage is _GraphStage.NAME:
            logger.info("received Name: %s", text)
            self.name = text
            if self.store.ensure_channel(text):
                self.registry[text] = GraphParams()
            self._stage = _GraphStage.X
        elif self._stage is _GraphStage.X:
            try:
                self._x = _parse_float(text)
            except ValueError as exc:
                logger.warning("could not parse: %s", exc)
            self._stage = _GraphStage.Y
        else:
            try:
                self._y = _parse_float(text)
            except ValueError as exc:
                logger.warning("could not parse: %s", exc)
            else:
                if self.name in self.store:
                    self.store.append(self.name, (self._x, self._y))
            self._stage = _GraphStage.X


class _HeatmapStage(Enum):
    NAME = auto()
    LENGTH = auto()
    VALUE = auto()
    LAST_VALUE = auto()


class HeatmapSession:
    """Protocol state of one heatmap connection: name, frame length, then frames of values."""

    def __init__(self, store: DataStore, registry: MutableMapping[str, HeatmapParams]):
        self.store = store
        self.registry = registry
        self.name = _INITIAL_NAME
        self.length = DEFAULT_FRAME_LENGTH
        self._stage = _HeatmapStage.NAME
        self._frame: list[Point] = []
        self._index = 0

    def feed_line(self, line: str) -> None:
        """Handle one received line."""
        text = line.strip()
        if self._stage is _HeatmapStage.NAME:
            logger.info("received Name: %s", text)
            self.name = text
            if self.store.ensure_channel(text):
                self.registry[text] = HeatmapParams()
            self._stage = _HeatmapStage.LENGTH
        elif self._stage is _HeatmapStage.LENGTH:
            try:
                self.length = _parse_int(text)
            except ValueError as exc:
                logger.warning("could not parse: %s", exc)
            else:
                logger.info("received Len: %d", self.length)
            self._stage = _HeatmapStage.VALUE
        elif self._stage is _HeatmapStage.VALUE:
            try:
                value = _parse_float(text)
            except ValueError as exc:
                logger.warning("could not parse: %s", exc)
            else:
                self._frame.append((value, float(self._index)))
            self._index += 1
            if self._index == self.length - 1:
                self._stage = _HeatmapStage.LAST_VALUE
        else:
            try:
                value = _parse_float(text)
            except ValueError as exc:
                logger.warning("could not parse: %s", exc)
            else:
                self._frame.append((value, float(self._index)))
                self._index = 0
                if self.name in self.store:
                    self.store.replace(self.name, self._frame)
                    self._frame = []
            self._stage = _HeatmapStage.VALUE


async def _serve(make_session: Callable[[], GraphSession | HeatmapSession], host: str, port: int) -> None:
    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        session = make_session()
        try:
            while True:
                try:
                    raw = await reader.readline()
                except (ConnectionError, ValueError) as exc:
                    logger.warning("connection error: %s", exc)
                    break
                if not raw:
                    logger.info("Connection was closed")
                    break
                try:
                    line = raw.decode("utf-8")
                except UnicodeDecodeError as exc:
                    logger.warning("invalid text received: %s", exc)
                    break
                session.feed_line(line)
        finally:
            writer.close()

    server = await asyncio.start_server(handle, host, port)
    async with server:
        await server.serve_forever()


async def serve_graph(
    store: DataStore,
    registry: MutableMapping[str, GraphParams],
    host: str = DEFAULT_HOST,
    port: int = GRAPH_PORT,
) -> None:
    """Accept graph connections forever; raises ``OSError`` if the address cannot be bound."""
    await _serve(lambda: GraphSession(store, registry), host, port)


async def serve_heatmap(
    store: DataStore,
    registry: MutableMapping[str, HeatmapParams],
    host: str = DEFAULT_HOST,
    port: int = HEATMAP_PORT,
) -> None:
    """Accept heatmap connections forever; raises ``OSError`` if the address cannot be bound."""
    await _serve(lambda: HeatmapSession(store, registry), host, port)