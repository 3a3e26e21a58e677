"""Subsequence search over dependency tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field

from .tree import DependencyTree, NodeId


def is_subsequence_match(needle: str, haystack: str) -> bool:
    """Check if needle's characters appear in haystack in order, ignoring case."""
    remaining = iter(haystack.lower())
    return all(char in remaining for char in needle.lower())


def find_matches(query: str, tree: DependencyTree) -> list[NodeId]:
    """All nodes whose name matches query, in storage order."""
    if not query:
        return []
    return [node_id for node_id, node in tree.iter_nodes() if is_subsequence_match(query, node.name)]


@dataclass
class SearchState:
    """Query text, its matches and a cyclic cursor over them."""

    query: str = ""
    matches: list[NodeId] = field(default_factory=list)
    cursor: int | None = None

    @property
    def current(self) -> NodeId | None:
        """The node under the cursor, if any."""
        if self.cursor is None:
            return None
        return self.matches[self.cursor]

    @property
    def position(self) -> tuple[int, int] | None:
        """1-based cursor position and match count, for display."""
        if self.cursor is None:
            return None
        return self.cursor + 1, len(self.matches)

    def is_match(self, node_id: NodeId) -> bool:
        return node_id in self.matches

    def recompute(self, tree: DependencyTree) -> NodeId | None:
        """Recompute matches for the current query. Returns the first match."""
        self.matches = find_matches(self.query, tree)
        self.cursor = 0 if self.matches else None
        return self.current

    def advance(self, step: int) -> NodeId | None:
        """Move the cursor by step, wrapping at both ends. Returns the new match."""
        if not self.matches or self.cursor is None:
            return None
        self.cursor = (self.cursor + step) % len(self.matches)
        return self.current

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.cursor = None
