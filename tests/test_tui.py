"""Rendering helpers and a headless run of the Textual app."""

import asyncio

from deptui.keys import KeyCode
from deptui.state import TuiState
from deptui.tui import DeptuiApp, format_row, render_status, render_tree


def test_format_row_markers_and_labels(make_tree):
    tree = make_tree([("app", None), ("rich", 0), ("old", 0)])
    tree.nodes[1].version = "13.7.0"
    tree.nodes[2].missing = True
    state = TuiState(tree)

    assert format_row(state, 0, 0).plain == "▼ app"
    assert format_row(state, 1, 1).plain == "    rich v13.7.0"
    assert format_row(state, 2, 1).plain == "    old (not installed)"


def test_render_tree_respects_viewport(deep_tree):
    state = TuiState(deep_tree)
    state.tree_widget_state.viewport_height = 3
    state.tree_widget_state.offset = 2

    lines = render_tree(state).plain.splitlines()

    assert [line.strip().lstrip("▼ ") for line in lines] == ["colorama", "rich", "markdown-it-py"]


def test_render_status(crates_tree):
    state = TuiState(crates_tree)
    assert "?: help" in render_status(state).plain

    for key in ("/", "s", "e", KeyCode.DOWN):
        state.handle_key_event(key)
    status = render_status(state).plain
    assert status.startswith("/se")
    assert "[2/2]" in status

    state.handle_key_event("x")
    assert "[no matches]" in render_status(state).plain


def test_app_routes_keys_to_state(crates_tree):
    state = TuiState(crates_tree)
    app = DeptuiApp(state)

    async def scenario():
        async with app.run_test() as pilot:
            await pilot.press("slash", "s", "e", "down")
            assert state.search_query == "se"
            assert state.selected == 1

            await pilot.press("enter", "question_mark")
            await pilot.pause()
            assert state.help_visible
            assert app.query_one("#help-container").has_class("visible")

            await pilot.press("q")

    asyncio.run(scenario())
    assert not state.running
    assert not state.help_visible
