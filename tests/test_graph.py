import math

import pytest
from matplotlib.figure import Figure

from livemonitor.graph import (
    GraphParams,
    PlotMode,
    data_bounds,
    draw_graph,
    other_keys,
    overlay_channels,
    series_color,
)
from livemonitor.store import DataStore


def _store(**channels):
    store = DataStore()
    for name, points in channels.items():
        store.ensure_channel(name)
        for point in points:
            store.append(name, point)
    return store


def _axes():
    return Figure().add_subplot()


def test_plot_mode_names():
    assert str(GraphParams().plot_mode) == "Line"
    assert str(GraphParams(plot_mode=PlotMode.SCATTER).plot_mode) == "Scatter"


def test_default_params():
    params = GraphParams()
    assert params.plot_mode is PlotMode.LINE
    assert params.addplots == [0, 0, 0, 0]
    assert params.x_rescale and params.y_rescale
    assert not params.settings and not params.legend


def test_addplots_not_shared_between_instances():
    first, second = GraphParams(), GraphParams()
    first.addplots[0] = 2
    assert second.addplots[0] == 0


def test_data_bounds():
    assert data_bounds([(1.0, 5.0), (3.0, -2.0), (2.0, 0.0)]) == ((1.0, 3.0), (-2.0, 5.0))


def test_data_bounds_empty_is_infinite():
    (x_lo, x_hi), (y_lo, y_hi) = data_bounds([])
    assert x_lo == math.inf and x_hi == -math.inf
    assert y_lo == math.inf and y_hi == -math.inf


def test_update_ranges_rescale_fits_data():
    params = GraphParams()
    params.update_ranges([(2.0, 4.0), (6.0, 8.0)])
    assert (params.x_min, params.x_max, params.y_min, params.y_max) == (2.0, 6.0, 4.0, 8.0)
    params.update_ranges([(3.0, 5.0), (4.0, 6.0)])
    assert (params.x_min, params.x_max, params.y_min, params.y_max) == (3.0, 4.0, 5.0, 6.0)


def test_update_ranges_without_rescale_only_widens():
    params = GraphParams(x_rescale=False, y_rescale=False)
    params.update_ranges([(2.0, 4.0), (6.0, 8.0)])
    assert (params.x_min, params.x_max) == (0.0, 6.0)
    assert (params.y_min, params.y_max) == (0.0, 8.0)
    params.update_ranges([(-1.0, 1.0)])
    assert (params.x_min, params.x_max) == (-1.0, 6.0)
    assert (params.y_min, params.y_max) == (0.0, 8.0)


def test_update_ranges_ignores_empty():
    params = GraphParams(x_min=1.0, x_max=2.0, y_min=3.0, y_max=4.0)
    params.update_ranges([])
    assert (params.x_min, params.x_max, params.y_min, params.y_max) == (1.0, 2.0, 3.0, 4.0)


def test_toggles():
    params = GraphParams()
    assert params.toggle_settings() is True
    assert params.toggle_settings() is False
    assert params.toggle_legend() is True
    assert params.legend is True


def test_other_keys_excludes_key():
    assert other_keys("b", ["a", "b", "c"]) == ["Unselected", "a", "c"]


def test_series_color_components_in_range():
    for index in range(6):
        color = series_color(index, 5)
        assert len(color) == 3
        assert all(0.0 <= c <= 1.0 for c in color)


def test_series_color_clamps_position():
    assert series_color(7, 3) == series_color(3, 3)
    assert series_color(-2, 3) == series_color(0, 3)


def test_series_color_rejects_zero_count():
    with pytest.raises(ValueError):
        series_color(0, 0)


def test_overlay_channels_skips_unselected_and_unknown():
    params = GraphParams(addplots=[0, 1, 2, 1])
    registry = {"main": params, "a": GraphParams()}
    result = overlay_channels(params, "main", ["main", "a", "h"], registry)
    assert result == [(1, "a"), (1, "a")]


def test_overlay_channels_bad_index_raises():
    params = GraphParams(addplots=[5, 0, 0, 0])
    with pytest.raises(IndexError):
        overlay_channels(params, "main", ["main"], {"main": params})


def test_draw_graph_line_sets_limits():
    store = _store(a=[(0.0, -1.0), (1.0, 0.5), (2.0, 1.0)])
    registry = {"a": GraphParams()}
    ax = _axes()
    assert draw_graph(ax, "a", store, registry, dark=False) == ["a"]
    assert len(ax.lines) == 1
    assert ax.get_xlim() == (0.0, 2.0)
    assert ax.get_ylim() == (-1.0, 1.0)
    assert ax.get_legend() is None


def test_draw_graph_scatter_with_overlay_and_legend():
    store = _store(a=[(0.0, 0.0), (1.0, 1.0)], b=[(0.5, 2.0)])
    params = GraphParams(plot_mode=PlotMode.SCATTER, legend=True, addplots=[1, 0, 0, 0])
    registry = {"a": params, "b": GraphParams()}
    ax = _axes()
    drawn = draw_graph(ax, "a", store, registry, dark=True)
    assert drawn == ["a", "b"]
    assert len(ax.collections) == 1
    assert len(ax.lines) == 1
    labels = [text.get_text() for text in ax.get_legend().get_texts()]
    assert labels == ["a", "b"]


def test_draw_graph_empty_channel_keeps_ranges():
    store = _store(a=[])
    params = GraphParams(x_min=1.0, x_max=3.0, y_min=-2.0, y_max=2.0)
    ax = _axes()
    draw_graph(ax, "a", store, {"a": params}, dark=False)
    assert (params.x_min, params.x_max) == (1.0, 3.0)
    assert ax.get_xlim() == (1.0, 3.0)


def test_draw_graph_unknown_parameters_raise():
    store = _store(a=[(0.0, 0.0)])
    with pytest.raises(KeyError):
        draw_graph(_axes(), "a", store, {}, dark=False)