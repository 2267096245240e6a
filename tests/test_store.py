import pytest

from livemonitor.store import DataStore


def test_default_capacity_is_one_thousand():
    assert DataStore().capacity == 1000


def test_ensure_channel_reports_creation():
    store = DataStore()
    assert store.ensure_channel("Sinus") is True
    assert store.ensure_channel("Sinus") is False
    assert store.channels() == ["Sinus"]


def test_append_keeps_points_in_order():
    store = DataStore(capacity=10)
    store.ensure_channel("a")
    store.append("a", (1, 2))
    store.append("a", (3.5, -1.0))
    assert store.get("a") == [(1.0, 2.0), (3.5, -1.0)]


def test_append_drops_oldest_beyond_capacity():
    store = DataStore(capacity=3)
    store.ensure_channel("a")
    for i in range(5):
        store.append("a", (i, i * 10))
    assert store.get("a") == [(2.0, 20.0), (3.0, 30.0), (4.0, 40.0)]


def test_lowered_capacity_applies_on_next_append():
    store = DataStore(capacity=5)
    store.ensure_channel("a")
    for i in range(5):
        store.append("a", (i, 0))
    store.capacity = 2
    assert len(store.get("a")) == 5
    store.append("a", (5, 0))
    assert store.get("a") == [(4.0, 0.0), (5.0, 0.0)]


def test_zero_capacity_keeps_nothing():
    store = DataStore(capacity=0)
    store.ensure_channel("a")
    store.append("a", (1, 1))
    assert store.get("a") == []


@pytest.mark.parametrize("value", [-1, -100])
def test_negative_capacity_rejected(value):
    with pytest.raises(ValueError):
        DataStore(capacity=value)


@pytest.mark.parametrize("value", [1.5, "10", True])
def test_non_integer_capacity_rejected(value):
    store = DataStore()
    with pytest.raises(TypeError):
        store.capacity = value
    assert store.capacity == 1000


def test_unknown_channel_raises_key_error():
    store = DataStore()
    with pytest.raises(KeyError):
        store.append("missing", (0, 0))
    with pytest.raises(KeyError):
        store.get("missing")
    with pytest.raises(KeyError):
        store.clear("missing")
    with pytest.raises(KeyError):
        store.replace("missing", [])


def test_replace_overwrites_content_ignoring_capacity():
    store = DataStore(capacity=1)
    store.ensure_channel("h")
    store.append("h", (9, 9))
    store.replace("h", [(1, 0), (2, 1), (3, 2)])
    assert store.get("h") == [(1.0, 0.0), (2.0, 1.0), (3.0, 2.0)]


def test_clear_keeps_channel():
    store = DataStore()
    store.ensure_channel("a")
    store.append("a", (1, 1))
    store.clear("a")
    assert store.get("a") == []
    assert "a" in store


def test_get_returns_copy():
    store = DataStore()
    store.ensure_channel("a")
    store.append("a", (1, 1))
    copy = store.get("a")
    copy.append((2.0, 2.0))
    assert store.get("a") == [(1.0, 1.0)]


def test_contains_and_len():
    store = DataStore()
    assert len(store) == 0
    store.ensure_channel("x")
    store.ensure_channel("y")
    store.ensure_channel("x")
    assert len(store) == 2
    assert "y" in store
    assert "z" not in store
    assert store.channels() == ["x", "y"]