from __future__ import annotations

from dataclasses import dataclass, field
from importlib import metadata

import pytest

from deptui.tree import DependencyTree


def build_tree(structure: list[tuple[str, int | None]], name: str = "demo") -> DependencyTree:
    """Build a tree from (node name, parent index) pairs in storage order."""
    tree = DependencyTree(name=name)
    for node_name, parent in structure:
        tree.add_node(node_name, parent)
    return tree


@pytest.fixture
def make_tree():
    return build_tree


@pytest.fixture
def crates_tree() -> DependencyTree:
    #   serde
    #   ├── serde_json
    #   └── tokio
    return build_tree([("serde", None), ("serde_json", 0), ("tokio", 0)])


@pytest.fixture
def deep_tree() -> DependencyTree:
    #   app                0
    #   ├── click          1
    #   │   └── colorama   2
    #   ├── rich           3
    #   │   ├── markdown-it-py  4
    #   │   │   └── mdurl  5
    #   │   └── pygments   6
    #   └── textual        7
    return build_tree([
        ("app", None),
        ("click", 0),
        ("colorama", 1),
        ("rich", 0),
        ("markdown-it-py", 3),
        ("mdurl", 4),
        ("pygments", 3),
        ("textual", 0),
    ])


@dataclass
class FakeDistribution:
    name: str
    version: str
    requires: list[str] | None = field(default_factory=list)


@pytest.fixture
def installed(monkeypatch):
    """Replace the installed distributions seen by importlib.metadata."""
    packages: dict[str, FakeDistribution] = {}

    def distribution(name: str) -> FakeDistribution:
        key = name.lower().replace("_", "-")
        if key not in packages:
            raise metadata.PackageNotFoundError(name)
        return packages[key]

    def install(name: str, version: str, requires: list[str] | None = None) -> None:
        packages[name.lower()] = FakeDistribution(name, version, requires or [])

    monkeypatch.setattr(metadata, "distribution", distribution)
    return install
