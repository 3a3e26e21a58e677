"""Dependency tree data structure for deptui."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, NewType

NodeId = NewType("NodeId", int)

ROOT = NodeId(0)


@dataclass
class Node:
    """A node in the dependency tree."""

    name: str
    version: str | None = None
    specifier: str = ""
    parent: NodeId | None = None
    children: list[NodeId] = field(default_factory=list)
    duplicate: bool = False
    missing: bool = False

    @property
    def label(self) -> str:
        """Name plus version, as shown in listings."""
        if self.version:
            return f"{self.name} v{self.version}"
        return self.name

    def to_dict(self) -> dict:
        """Convert node to dictionary."""
        data = {
            "name": self.name,
            "version": self.version,
            "specifier": self.specifier,
            "children": list(self.children),
        }
        if self.parent is not None:
            data["parent"] = self.parent
        if self.duplicate:
            data["duplicate"] = True
        if self.missing:
            data["missing"] = True
        return data


@dataclass
class DependencyTree:
    """A dependency tree. Node 0 is the project itself."""

    name: str
    manifest_path: Path | None = None
    nodes: list[Node] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> dict:
        """Convert tree to dictionary."""
        return {
            "name": self.name,
            "manifest": str(self.manifest_path) if self.manifest_path else None,
            "nodes": [node.to_dict() for node in self.nodes],
        }

    def add_node(self, name: str, parent: NodeId | None = None, **attrs) -> NodeId:
        """Append a node, linking it under parent. Returns the new ID."""
        if parent is not None and not self.contains(parent):
            raise ValueError(f"Parent node {parent} not found")

        node_id = NodeId(len(self.nodes))
        self.nodes.append(Node(name=name, parent=parent, **attrs))
        if parent is not None:
            self.nodes[parent].children.append(node_id)
        return node_id

    def contains(self, node_id: NodeId) -> bool:
        return 0 <= node_id < len(self.nodes)

    def get_node(self, node_id: NodeId) -> Node | None:
        """Get a node by ID."""
        if self.contains(node_id):
            return self.nodes[node_id]
        return None

    def iter_nodes(self) -> Iterator[tuple[NodeId, Node]]:
        """Iterate nodes in storage order, yielding (node_id, node)."""
        for index, node in enumerate(self.nodes):
            yield NodeId(index), node

    def iter_tree(self, start: NodeId = ROOT) -> Iterator[tuple[NodeId, int]]:
        """Iterate through the tree in DFS order, yielding (node_id, depth)."""
        if not self.contains(start):
            return

        def _iter(node_id: NodeId, depth: int):
            yield node_id, depth
            for child_id in self.nodes[node_id].children:
                yield from _iter(child_id, depth + 1)

        yield from _iter(start, 0)

    def get_path_to_root(self, node_id: NodeId) -> list[NodeId]:
        """Get the path from root to the specified node."""
        path = []
        current = node_id if self.contains(node_id) else None
        while current is not None:
            path.append(current)
            current = self.nodes[current].parent
        return list(reversed(path))

    def get_siblings(self, node_id: NodeId) -> list[NodeId]:
        """Get the children of the node's parent, the node included."""
        node = self.get_node(node_id)
        if node is None:
            return []
        if node.parent is None:
            return [node_id]
        return list(self.nodes[node.parent].children)

    def get_statistics(self) -> dict:
        """Get statistics about the tree."""
        stats = {
            "total": len(self.nodes),
            "unique": 0,
            "duplicates": 0,
            "missing": 0,
            "leaves": 0,
            "max_depth": 0,
        }

        names = set()
        for node in self.nodes:
            names.add(node.name.lower())
            if node.duplicate:
                stats["duplicates"] += 1
            if node.missing:
                stats["missing"] += 1
            if not node.children:
                stats["leaves"] += 1
        stats["unique"] = len(names)

        for _, depth in self.iter_tree():
            stats["max_depth"] = max(stats["max_depth"], depth)

        return stats
