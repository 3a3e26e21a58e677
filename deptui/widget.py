"""Selection, expansion and viewport state for the tree view."""

from __future__ import annotations

from dataclasses import dataclass, field

from .tree import ROOT, DependencyTree, NodeId


@dataclass
class TreeWidgetState:
    """Expand set, viewport and current selection of the tree view.

    Every operation is a no-op when nothing is selected or the tree is empty.
    """

    expanded: set[NodeId] = field(default_factory=set)
    selected: NodeId | None = None
    offset: int = 0
    viewport_height: int = 20

    def visible_nodes(self, tree: DependencyTree) -> list[tuple[NodeId, int]]:
        """Rows currently shown, as (node_id, depth) in display order."""
        rows: list[tuple[NodeId, int]] = []
        if not len(tree):
            return rows

        stack = [(ROOT, 0)]
        while stack:
            node_id, depth = stack.pop()
            rows.append((node_id, depth))
            if node_id in self.expanded:
                children = tree.nodes[node_id].children
                stack.extend((child, depth + 1) for child in reversed(children))
        return rows

    def expand_all(self, tree: DependencyTree) -> None:
        self.expanded = {node_id for node_id, node in tree.iter_nodes() if node.children}
        if self.selected is None and len(tree):
            self.selected = ROOT

    def expand(self, tree: DependencyTree) -> None:
        node = self._selected_node(tree)
        if node is not None and node.children:
            self.expanded.add(self.selected)

    def collapse(self, tree: DependencyTree) -> None:
        if self._selected_node(tree) is not None:
            self.expanded.discard(self.selected)
            self.scroll_into_view(self.visible_nodes(tree))

    def select_next(self, tree: DependencyTree) -> None:
        self._move(tree, 1)

    def select_previous(self, tree: DependencyTree) -> None:
        self._move(tree, -1)

    def page_down(self, tree: DependencyTree) -> None:
        self._move(tree, max(1, self.viewport_height))

    def page_up(self, tree: DependencyTree) -> None:
        self._move(tree, -max(1, self.viewport_height))

    def select_parent(self, tree: DependencyTree) -> None:
        node = self._selected_node(tree)
        if node is not None and node.parent is not None:
            self.selected = node.parent
            self.scroll_into_view(self.visible_nodes(tree))

    def select_next_sibling(self, tree: DependencyTree) -> None:
        self._move_sibling(tree, 1)

    def select_previous_sibling(self, tree: DependencyTree) -> None:
        self._move_sibling(tree, -1)

    def reveal(self, tree: DependencyTree) -> None:
        """Expand the ancestors of the selection and scroll it into view."""
        if self._selected_node(tree) is None:
            return
        for ancestor in tree.get_path_to_root(self.selected)[:-1]:
            self.expanded.add(ancestor)
        self.scroll_into_view(self.visible_nodes(tree))

    def scroll_into_view(self, rows: list[tuple[NodeId, int]]) -> None:
        """Adjust offset so the selected row lies inside the viewport."""
        height = max(1, self.viewport_height)
        row = self._row_of(rows)
        if row is None:
            self.offset = max(0, min(self.offset, len(rows) - height))
            return
        if row < self.offset:
            self.offset = row
        elif row >= self.offset + height:
            self.offset = row - height + 1

    def _selected_node(self, tree: DependencyTree):
        if self.selected is None:
            return None
        return tree.get_node(self.selected)

    def _row_of(self, rows: list[tuple[NodeId, int]]) -> int | None:
        for row, (node_id, _) in enumerate(rows):
            if node_id == self.selected:
                return row
        return None

    def _move(self, tree: DependencyTree, delta: int) -> None:
        if self._selected_node(tree) is None:
            return
        rows = self.visible_nodes(tree)
        row = self._row_of(rows)
        if row is None:
            # Selected node is hidden under a collapsed ancestor.
            self.reveal(tree)
            rows = self.visible_nodes(tree)
            row = self._row_of(rows)
        target = max(0, min(len(rows) - 1, row + delta))
        self.selected = rows[target][0]
        self.scroll_into_view(rows)

    def _move_sibling(self, tree: DependencyTree, delta: int) -> None:
        if self._selected_node(tree) is None:
            return
        siblings = tree.get_siblings(self.selected)
        index = siblings.index(self.selected) + delta
        if 0 <= index < len(siblings):
            self.selected = siblings[index]
            self.reveal(tree)
