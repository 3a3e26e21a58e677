"""CLI commands for deptui."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from . import __version__, display
from .config import Config, get_log_path
from .logs import configure_logging
from .manifest import TreeLoadError, load_dependency_tree
from .search import find_matches
from .themes import THEME_NAMES
from .tree import DependencyTree


class Options:
    """Global options shared by the subcommands."""

    def __init__(self, manifest: Path | None, include_extras: bool, log_level: int,
                 log_file: Path | None) -> None:
        self.manifest = manifest
        self.include_extras = include_extras
        self.log_level = log_level
        self.log_file = log_file


def load_tree(options: Options) -> DependencyTree:
    """Load the dependency tree or raise a click error."""
    try:
        return load_dependency_tree(options.manifest, include_extras=options.include_extras)
    except TreeLoadError as e:
        raise click.ClickException(str(e))


# === Main group ===

@click.group(invoke_without_command=True)
@click.option("-m", "--manifest", type=click.Path(path_type=Path),
              help="pyproject.toml, requirements.txt or a directory holding one")
@click.option("--extras/--no-extras", default=None,
              help="Include optional dependency groups")
@click.option("-v", "--verbose", is_flag=True, help="Log debug messages")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Write log messages to this file")
@click.version_option(__version__, prog_name="deptui")
@click.pass_context
def cli(ctx, manifest, extras, verbose, log_file):
    """deptui - browse and search a Python project's dependency tree."""
    config = Config.load()
    options = Options(
        manifest=manifest,
        include_extras=config.include_extras if extras is None else extras,
        log_level=logging.DEBUG if verbose else logging.WARNING,
        log_file=log_file,
    )
    ctx.obj = options
    configure_logging(options.log_level, log_file)

    if ctx.invoked_subcommand is None:
        if config.default_mode == "tui":
            ctx.invoke(tui_cmd)
        else:
            ctx.invoke(show_cmd)


# === Mode commands ===

@cli.command("tui")
@click.pass_obj
def tui_cmd(options: Options):
    """Open the interactive viewer."""
    from .state import TuiState
    from .tui import run_tui

    # The terminal belongs to the TUI from here on
    configure_logging(options.log_level, options.log_file or get_log_path())
    try:
        state = TuiState.from_manifest(options.manifest, include_extras=options.include_extras)
    except TreeLoadError as e:
        raise click.ClickException(str(e))
    run_tui(state, Config.load().theme)


@cli.command("show")
@click.option("-d", "--depth", type=int, help="Limit display depth")
@click.option("--json", "as_json", is_flag=True, help="Print the tree as JSON")
@click.pass_obj
def show_cmd(options: Options, depth=None, as_json=False):
    """Print the dependency tree."""
    tree = load_tree(options)
    if as_json:
        click.echo(json.dumps(tree.to_dict(), indent=2, ensure_ascii=False))
    else:
        display.print_tree(tree, max_depth=depth)


@cli.command("search")
@click.argument("query")
@click.pass_obj
def search_cmd(options: Options, query):
    """Print packages whose name contains QUERY's letters in order."""
    tree = load_tree(options)
    matches = find_matches(query, tree)
    display.print_matches(tree, matches)
    if not matches:
        click.get_current_context().exit(1)


@cli.command("stat")
@click.pass_obj
def stat_cmd(options: Options):
    """Show tree statistics."""
    display.print_statistics(load_tree(options))


# === Settings ===

@cli.command("theme")
@click.argument("name", required=False, type=click.Choice(THEME_NAMES))
def theme_cmd(name):
    """List themes, or set the TUI theme."""
    config = Config.load()
    if name is None:
        display.print_themes(THEME_NAMES, config.theme)
        return

    config.theme = name
    config.save()
    display.print_success(f"Theme set to '{name}'")


if __name__ == "__main__":
    cli()
