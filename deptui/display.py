"""CLI display formatting for deptui."""

from rich.console import Console
from rich.text import Text
from rich.tree import Tree as RichTree

from .tree import ROOT, DependencyTree, Node, NodeId

console = Console()


def format_node_label(node: Node, highlight: bool = False) -> Text:
    """Format a node label with version and duplicate/missing markers."""
    text = Text()
    text.append(node.name, style="bold yellow" if highlight else "")

    if node.version:
        text.append(f" v{node.version}", style="dim")
    if node.duplicate:
        text.append(" (*)", style="dim")
    if node.missing:
        text.append(" (not installed)", style="red")

    return text


def format_statistics(tree: DependencyTree) -> str:
    """Format a one-line summary of the tree."""
    stats = tree.get_statistics()
    parts = [f"{stats['total'] - 1} dependencies"] if stats["total"] else []
    if stats["duplicates"]:
        parts.append(f"{stats['duplicates']} repeated")
    if stats["missing"]:
        parts.append(f"{stats['missing']} missing")
    return f"[{', '.join(parts)}]" if parts else ""


def print_tree(tree: DependencyTree, max_depth: int | None = None) -> None:
    """Print the dependency tree."""
    console.print()
    header = Text(tree.name, style="bold cyan")
    header.append("  ")
    header.append(format_statistics(tree), style="dim")
    console.print(header)
    if tree.manifest_path:
        console.print(str(tree.manifest_path), style="dim")
    console.rule(style="dim")

    if not len(tree):
        console.print("[dim](empty)[/dim]")
        return

    def add_children(rich_node, node_id: NodeId, depth: int):
        for child_id in tree.nodes[node_id].children:
            child_rich = rich_node.add(format_node_label(tree.nodes[child_id]))
            if max_depth is None or depth < max_depth:
                add_children(child_rich, child_id, depth + 1)

    rich_tree = RichTree(Text(tree.nodes[ROOT].name, style="bold"))
    add_children(rich_tree, ROOT, 1)

    console.print(rich_tree)
    console.print()


def print_matches(tree: DependencyTree, matches: list[NodeId]) -> None:
    """Print matching nodes with their path from the root."""
    if not matches:
        console.print("[dim](no matches)[/dim]")
        return

    for node_id in matches:
        path = tree.get_path_to_root(node_id)
        line = Text()
        for i, step in enumerate(path):
            if i > 0:
                line.append(" → ", style="dim")
            line.append_text(format_node_label(tree.nodes[step], highlight=step == node_id))
        console.print(line)


def print_statistics(tree: DependencyTree) -> None:
    """Print tree statistics."""
    stats = tree.get_statistics()

    console.print(f"\n[bold]{tree.name}[/bold] Statistics")
    console.rule(style="dim")
    console.print(f"Total nodes: {stats['total']}")
    console.print(f"Unique packages: {stats['unique']}")
    console.print(f"  (*) Repeated: {stats['duplicates']}")
    console.print(f"  Not installed: {stats['missing']}")
    console.print(f"Leaf nodes: {stats['leaves']}")
    console.print(f"Max depth: {stats['max_depth']}")
    console.print()


def print_themes(themes: list[str], current: str | None = None) -> None:
    """Print available themes, marking the active one."""
    console.print("\n[bold]Themes[/bold]")
    console.rule(style="dim")

    for name in themes:
        if name == current:
            console.print(f"► {name}", style="green bold")
        else:
            console.print(f"  {name}")
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")
