# livemonitor

A small desktop monitor that plots numeric data while it arrives over TCP.
Each client connection names a data channel and then streams values. The
window is a matplotlib figure. It lists the known channels in a side panel and
draws a plot for every channel you choose to show.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
livemonitor
```

Options:

- `--capacity N`: how many points each graph channel keeps (default 1000).
- `--frame-time MS`: milliseconds between redraws (default 30).
- `--dark`: use dark colours.

The command opens the monitor window. On a background thread it starts two
listeners on the local machine:

- `127.0.0.1:7800` takes **graph** data, which is drawn as line or scatter plots.
- `127.0.0.1:7810` takes **heatmap** data, which is drawn as a grid of coloured cells.

If an address cannot be bound, the error is logged and the other listener
keeps running.

The window is driven from the keyboard:

- `1` to `9` show or hide the channel with that number in the side panel.
- `g` shows or hides a guide with an example sender.
- `+` and `-` raise or lower the capacity by 10.

The bottom line shows the version, the graph address and the time the last
redraw took.

## Graph protocol (port 7800)

Everything is newline-terminated text. The first line is the channel name.
After that come alternating `x` and `y` values:

```
Sinus
0.0
0.0
0.005
0.004999979
...
```

Each graph channel holds at most the configured capacity of points. The oldest
points are dropped first. A line that cannot be parsed is logged. A bad `x`
keeps the previous `x` value, and a bad `y` drops that point.

An example sender:

```python
import math
import socket
import time

with socket.create_connection(("127.0.0.1", 7800)) as sender:
    sender.sendall(b"Sinus\n")
    t = 0.0
    while True:
        sender.sendall(f"{t}\n{math.sin(t)}\n".encode())
        time.sleep(0.005)
        t += 0.005
```

## Heatmap protocol (port 7810)

The first line is the channel name. The second line is the frame length `n`
(50 if it cannot be parsed). After that come frames of `n` values, one value
per line. Each complete frame replaces the channel's contents. The capacity
does not apply to heatmap channels.

A heatmap shows `x_num` × `y_num` cells (5 × 10 by default), filled row by row
from the frame's values. A value's colour comes from a cyclic hue map over the
range 0 to 1, and values outside that range are clamped. If the channel holds
fewer values than the grid needs, the panel shows that message in place of the
plot.

## Using the pieces from Python

- `livemonitor.store.DataStore`: thread-safe named channels of `(x, y)`
  points, with `ensure_channel`, `append` (capped by `capacity`), `replace`,
  `clear`, `get` and `channels`.
- `livemonitor.server.GraphSession` and `HeatmapSession` parse the two line
  protocols one line at a time with `feed_line`, so any source of lines can
  drive them. `serve_graph` and `serve_heatmap` are the asyncio servers.
- `livemonitor.graph`: `GraphParams` holds the view settings of a graph.
  These are axis ranges, `x_rescale`/`y_rescale` (with rescaling off a range
  only grows), `plot_mode` (`PlotMode.LINE` or `PlotMode.SCATTER`), `legend`,
  and `addplots`, which holds four overlay slots indexing into
  `other_keys(key, channels)`. `draw_graph` draws onto a matplotlib axes.
- `livemonitor.heatmap`: `HeatmapParams`, `build_matrix` and `draw_heatmap`.
- `livemonitor.app.Monitor`: the window state, with `toggle_channel`,
  `toggle_guide`, `set_capacity`, `start_servers` and `render(figure)`.

```python
import asyncio

from livemonitor.store import DataStore
from livemonitor.server import serve_graph

store = DataStore(1000)
registry = {}
asyncio.run(serve_graph(store, registry, "127.0.0.1", 7800))
```

## What the window does not do

The window has no mouse controls and no settings dialog. These per-plot
settings can only be changed from Python, through the parameter objects in
`Monitor.graph_params` and `Monitor.heatmap_params`:

- rescaling
- plot mode
- legend
- overlays
- heatmap grid size

The same applies to emptying a channel, which is done with
`DataStore.clear`. The listen addresses are fixed for the command, but
`Monitor.host`, `graph_port` and `heatmap_port` can be changed before
`start_servers`.