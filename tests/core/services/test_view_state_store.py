import pytest

from xml_navigator.config import SettingsStore
from xml_navigator.core.models import Layout, Rect, ViewState
from xml_navigator.core.services import ViewStateStore


@pytest.fixture
def store():
    return ViewStateStore(default_column_width=100, column_count=2, max_recent_files=4)


def test_first_run_defaults(store):
    state = store.load(SettingsStore())

    assert state.layout is Layout.VERTICAL
    assert state.split_position is None
    assert state.column_widths == (100, 100)
    assert state.last_query == ""
    assert state.window_rect is None
    assert state.recent_files == ()


def test_first_run_split_is_three_quarters():
    assert ViewState().effective_split_position(800) == 600
    assert ViewState(split_position=250).effective_split_position(800) == 250


def test_save_then_load(store, tmp_path):
    path = tmp_path / "settings.yml"
    state = ViewState(
        layout=Layout.HORIZONTAL,
        split_position=320,
        column_widths=(150, 220),
        last_query="//book",
        window_rect=Rect(10, 20, 800, 600),
        recent_files=("a.xml", "b.xml"),
    )
    settings = SettingsStore(path)
    store.save(settings, state)
    settings.flush()

    assert store.load(SettingsStore(path).load()) == state


def test_invalid_layout_falls_back_to_default(store):
    settings = SettingsStore()
    settings.write_string("UI", "Layout", "diagonal")
    settings.write_int("UI", "SplitPos", 200)

    state = store.load(settings)

    assert state.layout is Layout.VERTICAL
    assert state.split_position == 200


def test_bad_column_widths_use_default(store):
    settings = SettingsStore()
    settings.write_string("UI", "ColumnWidths", "0,abc,300")
    assert store.load(settings).column_widths == (100, 100)

    settings.write_string("UI", "ColumnWidths", "180")
    assert store.load(settings).column_widths == (180, 100)


def test_negative_split_means_unset(store):
    settings = SettingsStore()
    settings.write_int("UI", "SplitPos", -5)
    assert store.load(settings).split_position is None


def test_unset_split_is_removed_on_save(store):
    settings = SettingsStore()
    settings.write_int("UI", "SplitPos", 99)
    store.save(settings, ViewState())
    assert not settings.has("UI", "SplitPos")


def test_recent_files_are_capped_and_deduplicated(store):
    state = ViewState()
    for name in ("a", "b", "c", "d", "e", "c"):
        state = store.add_recent_file(state, name)
    assert state.recent_files == ("c", "e", "d", "b")

    state = store.remove_recent_file(state, "e")
    assert state.recent_files == ("c", "d", "b")
