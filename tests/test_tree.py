"""Tests for the dependency tree data structure."""

import pytest

from deptui.tree import DependencyTree


def test_add_node_links_parent(deep_tree):
    assert deep_tree.nodes[0].children == [1, 3, 7]
    assert deep_tree.nodes[5].parent == 4
    assert len(deep_tree) == 8


def test_add_node_with_unknown_parent():
    tree = DependencyTree(name="demo")
    with pytest.raises(ValueError):
        tree.add_node("orphan", 3)


def test_iter_nodes_is_storage_order(crates_tree):
    assert [(node_id, node.name) for node_id, node in crates_tree.iter_nodes()] == [
        (0, "serde"), (1, "serde_json"), (2, "tokio"),
    ]


def test_iter_tree_depth_first(deep_tree):
    assert list(deep_tree.iter_tree()) == [
        (0, 0), (1, 1), (2, 2), (3, 1), (4, 2), (5, 3), (6, 2), (7, 1),
    ]
    assert list(DependencyTree(name="empty").iter_tree()) == []


def test_path_and_siblings(deep_tree):
    assert deep_tree.get_path_to_root(5) == [0, 3, 4, 5]
    assert deep_tree.get_path_to_root(42) == []
    assert deep_tree.get_siblings(6) == [4, 6]
    assert deep_tree.get_siblings(0) == [0]
    assert deep_tree.get_siblings(42) == []


def test_statistics(make_tree):
    tree = make_tree([("app", None), ("rich", 0), ("click", 0), ("rich", 2)])
    tree.nodes[3].duplicate = True
    tree.nodes[2].missing = True

    stats = tree.get_statistics()

    assert stats == {
        "total": 4,
        "unique": 3,
        "duplicates": 1,
        "missing": 1,
        "leaves": 2,
        "max_depth": 2,
    }


def test_to_dict(crates_tree):
    crates_tree.nodes[2].version = "1.0"
    data = crates_tree.to_dict()
    assert data["name"] == "demo"
    assert data["nodes"][0] == {"name": "serde", "version": None, "specifier": "", "children": [1, 2]}
    assert data["nodes"][2]["parent"] == 0
    assert data["nodes"][2]["version"] == "1.0"
