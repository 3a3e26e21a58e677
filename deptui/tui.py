"""TUI interface for deptui using Textual."""

from __future__ import annotations

import logging

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import Header, Markdown, Static

from .keys import translate_key
from .state import TuiState
from .themes import register_themes
from .tree import NodeId

log = logging.getLogger(__name__)

HELP_TEXT = """# deptui - Keyboard Shortcuts

Any key closes this help.

## Navigation
| Key | Action |
|-----|--------|
| `↓` `↑` | Next / previous row |
| `PgDn` `PgUp` | Page down / up |
| `→` `←` | Expand / collapse node |
| `p` | Go to parent |
| `]` `[` | Next / previous sibling |

## Search
| Key | Action |
|-----|--------|
| `/` | Start search |
| `Enter` | Finish typing, keep matches |
| `Esc` | Cancel search |
| `↓` `↑` | Next / previous match (while typing) |
| `n` `N` | Next / previous match |
| `c` | Clear matches |

## Other
| Key | Action |
|-----|--------|
| `?` | Toggle this help |
| `q` | Quit |
"""

EXPANDED_MARKER = "▼ "
COLLAPSED_MARKER = "▶ "
LEAF_MARKER = "  "


def format_row(state: TuiState, node_id: NodeId, depth: int) -> Text:
    """Render one tree row with expand marker and search highlighting."""
    tree = state.dependency_tree
    widget = state.tree_widget_state
    node = tree.nodes[node_id]

    text = Text("  " * depth)
    if not node.children:
        text.append(LEAF_MARKER)
    elif node_id in widget.expanded:
        text.append(EXPANDED_MARKER, style="dim")
    else:
        text.append(COLLAPSED_MARKER, style="dim")

    if node_id == state.search.current:
        name_style = "bold black on yellow"
    elif state.search.is_match(node_id):
        name_style = "bold yellow"
    elif node.missing:
        name_style = "red"
    else:
        name_style = ""
    text.append(node.name, style=name_style)

    if node.version:
        text.append(f" v{node.version}", style="dim")
    if node.duplicate:
        text.append(" (*)", style="dim")
    if node.missing:
        text.append(" (not installed)", style="red")

    if node_id == widget.selected:
        text.stylize("reverse")
    return text


def render_tree(state: TuiState) -> Text:
    """Render the rows inside the viewport."""
    widget = state.tree_widget_state
    rows = widget.visible_nodes(state.dependency_tree)
    window = rows[widget.offset:widget.offset + widget.viewport_height]
    if not window:
        return Text("(no dependencies)", style="dim")
    return Text("\n").join(format_row(state, node_id, depth) for node_id, depth in window)


def render_status(state: TuiState) -> Text:
    """Render the status line: query while searching, match position, hints."""
    text = Text()
    if state.search_active:
        text.append("/", style="bold")
        text.append(state.search_query)
        text.append("█", style="blink")
        text.append("  ")

    position = state.search.position
    if position is not None:
        text.append(f"[{position[0]}/{position[1]}]", style="bold yellow")
        text.append("  ")
    elif state.search_query:
        text.append("[no matches]", style="red")
        text.append("  ")

    if state.search_active:
        text.append("Enter: done  Esc: cancel  ↑↓: matches", style="dim")
    else:
        text.append("/: search  ?: help  q: quit", style="dim")
    return text


class DeptuiApp(App):
    """deptui TUI Application."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layers: base overlay;
    }

    #tree-view {
        height: 1fr;
        padding: 0 1;
        border: solid $primary;
    }

    #status-line {
        height: 1;
        padding: 0 1;
        background: $panel;
    }

    #help-container {
        layer: overlay;
        align: center middle;
        width: 100%;
        height: 100%;
        display: none;
    }

    #help-container.visible {
        display: block;
    }

    #help-content {
        width: 70;
        max-width: 90%;
        height: auto;
        max-height: 90%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }
    """

    def __init__(self, state: TuiState, theme_name: str | None = None) -> None:
        super().__init__()
        self.state = state
        self.theme_name = theme_name

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="tree-view")
        yield Static("", id="status-line")
        yield Container(
            Markdown(HELP_TEXT, id="help-content"),
            id="help-container",
        )

    def on_mount(self) -> None:
        register_themes(self, self.theme_name)
        tree = self.state.dependency_tree
        self.title = f"deptui - {tree.name}"
        if tree.manifest_path:
            self.sub_title = str(tree.manifest_path)
        self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.call_after_refresh(self.refresh_view)

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        translated = translate_key(event.key, event.character)
        if translated is None:
            return
        self.state.handle_key_event(*translated)

        if not self.state.running:
            self.exit()
            return
        self.refresh_view()

    def refresh_view(self) -> None:
        """Redraw tree, status line and help overlay from state."""
        tree_view = self.query_one("#tree-view", Static)
        widget = self.state.tree_widget_state
        height = tree_view.size.height
        if height > 0:
            widget.viewport_height = height
        widget.reveal(self.state.dependency_tree)

        tree_view.update(render_tree(self.state))
        self.query_one("#status-line", Static).update(render_status(self.state))
        self.query_one("#help-container").set_class(self.state.help_visible, "visible")


def run_tui(state: TuiState, theme_name: str | None = None) -> None:
    """Run the TUI application."""
    log.info("Starting TUI for %s (%d nodes)", state.dependency_tree.name, len(state.dependency_tree))
    app = DeptuiApp(state, theme_name)
    app.run()
