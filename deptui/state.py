"""Interactive state and key dispatch for the deptui viewer."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from .keys import Key, KeyCode, Modifiers
from .manifest import load_dependency_tree
from .search import SearchState
from .tree import DependencyTree, NodeId
from .widget import TreeWidgetState

log = logging.getLogger(__name__)

HELP_KEY = "?"
SEARCH_KEY = "/"


class Mode(str, Enum):
    """Interaction mode. The help overlay is orthogonal to it."""
    NORMAL = "normal"
    SEARCHING = "searching"


class TuiState:
    """All state of an interactive session.

    Owns the dependency tree and the tree widget state. The event loop feeds
    key events into handle_key_event and renders from the public attributes.
    """

    def __init__(self, dependency_tree: DependencyTree,
                 tree_widget_state: TreeWidgetState | None = None) -> None:
        self.running = True
        self.dependency_tree = dependency_tree
        self.tree_widget_state = tree_widget_state or TreeWidgetState()
        self.tree_widget_state.expand_all(dependency_tree)
        self.help_visible = False
        self.mode = Mode.NORMAL
        self.search = SearchState()

    @classmethod
    def from_manifest(cls, manifest_path: Path | None = None, *,
                      include_extras: bool = False) -> "TuiState":
        """Load the tree for a manifest. Raises TreeLoadError on failure."""
        tree = load_dependency_tree(manifest_path, include_extras=include_extras)
        return cls(tree)

    @property
    def search_active(self) -> bool:
        return self.mode is Mode.SEARCHING

    @property
    def search_query(self) -> str:
        return self.search.query

    @property
    def search_matches(self) -> list[NodeId]:
        return self.search.matches

    @property
    def search_cursor(self) -> int | None:
        return self.search.cursor

    @property
    def selected(self) -> NodeId | None:
        return self.tree_widget_state.selected

    def handle_key_event(self, key: Key, modifiers: Modifiers = Modifiers.NONE) -> None:
        """Apply one key event. Unknown keys are ignored."""
        # Any key closes the help overlay; its own toggle key closes it below.
        if self.help_visible and not (self.mode is Mode.NORMAL and key == HELP_KEY):
            self.help_visible = False

        if self.mode is Mode.SEARCHING:
            self._handle_search_key(key)
        else:
            self._handle_normal_key(key)

    def _handle_search_key(self, key: Key) -> None:
        if key == KeyCode.ENTER:
            # Keep matches highlighted
            self.mode = Mode.NORMAL
        elif key == KeyCode.ESCAPE:
            self.clear_search()
        elif key == KeyCode.BACKSPACE:
            self.search.query = self.search.query[:-1]
            self.perform_search()
        elif key == KeyCode.DOWN:
            self.next_search_result()
        elif key == KeyCode.UP:
            self.prev_search_result()
        elif _is_char(key) and key != SEARCH_KEY:
            self.search.query += key
            self.perform_search()

    def _handle_normal_key(self, key: Key) -> None:
        tree = self.dependency_tree
        widget = self.tree_widget_state

        if key == SEARCH_KEY:
            self.mode = Mode.SEARCHING
            self.search.query = ""
            self.search.cursor = None
        elif key == "n":
            self.next_search_result()
        elif key == "N":
            self.prev_search_result()
        elif key == "c":
            self.clear_search()
        elif key == "q":
            log.debug("Quit requested")
            self.running = False
        elif key == HELP_KEY:
            self.help_visible = not self.help_visible
        elif key == "p":
            widget.select_parent(tree)
        elif key == "]":
            widget.select_next_sibling(tree)
        elif key == "[":
            widget.select_previous_sibling(tree)
        elif key == KeyCode.DOWN:
            widget.select_next(tree)
        elif key == KeyCode.UP:
            widget.select_previous(tree)
        elif key == KeyCode.PAGE_DOWN:
            widget.page_down(tree)
        elif key == KeyCode.PAGE_UP:
            widget.page_up(tree)
        elif key == KeyCode.RIGHT:
            widget.expand(tree)
        elif key == KeyCode.LEFT:
            widget.collapse(tree)

    def perform_search(self) -> None:
        """Recompute matches for the query and select the first one."""
        first = self.search.recompute(self.dependency_tree)
        log.debug("Search %r: %d matches", self.search.query, len(self.search.matches))
        if first is not None:
            self.tree_widget_state.selected = first

    def next_search_result(self) -> None:
        self._select_match(self.search.advance(1))

    def prev_search_result(self) -> None:
        self._select_match(self.search.advance(-1))

    def clear_search(self) -> None:
        """Leave search mode and drop query, matches and cursor together."""
        self.mode = Mode.NORMAL
        self.search.clear()

    def _select_match(self, node_id: NodeId | None) -> None:
        if node_id is not None:
            self.tree_widget_state.selected = node_id


def _is_char(key: Key) -> bool:
    return not isinstance(key, KeyCode) and len(key) == 1 and key.isprintable()
