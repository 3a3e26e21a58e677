"""Manifest discovery and dependency tree loading for deptui."""

from __future__ import annotations

import logging
import tomllib
from importlib import metadata
from pathlib import Path

from packaging.requirements import InvalidRequirement, Requirement
from packaging.utils import canonicalize_name

from .tree import DependencyTree, NodeId

log = logging.getLogger(__name__)

MANIFEST_NAMES = ("pyproject.toml", "requirements.txt")
DEFAULT_MAX_DEPTH = 32


class DeptuiError(Exception):
    """Base error for deptui."""


class TreeLoadError(DeptuiError):
    """The manifest could not be found, read or parsed."""


def parse_requirement(line: str) -> Requirement | None:
    """Parse a PEP 508 requirement string. None if unparseable."""
    try:
        return Requirement(line.strip())
    except InvalidRequirement:
        return None


def requirement_applies(requirement: Requirement, extras: frozenset[str] = frozenset()) -> bool:
    """Whether the requirement's marker holds here for any of the requested extras."""
    if requirement.marker is None:
        return True
    return any(requirement.marker.evaluate({"extra": extra}) for extra in ("", *sorted(extras)))


def find_manifest(start: Path | None = None) -> Path:
    """Find the nearest manifest, walking up from start (default: cwd)."""
    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for name in MANIFEST_NAMES:
            path = candidate_dir / name
            if path.is_file():
                log.debug("Found manifest %s", path)
                return path
    raise TreeLoadError(f"No {' or '.join(MANIFEST_NAMES)} found in {directory} or its parents")


def resolve_manifest(path: Path | None) -> Path:
    """Resolve an explicit manifest argument, or discover one."""
    if path is None:
        return find_manifest()
    if path.is_dir():
        for name in MANIFEST_NAMES:
            if (path / name).is_file():
                return path / name
        raise TreeLoadError(f"No {' or '.join(MANIFEST_NAMES)} found in {path}")
    if not path.exists():
        raise TreeLoadError(f"Manifest '{path}' not found")
    return path


def read_pyproject(path: Path, include_extras: bool = False) -> tuple[str, dict[str, list[str]]]:
    """Read project name and requirement groups from a pyproject.toml.

    The main requirements are keyed by the empty string; optional groups by
    their extra name when include_extras is set.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise TreeLoadError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise TreeLoadError(f"Cannot read {path}: {e}") from e

    project = data.get("project", {})
    if not isinstance(project, dict):
        raise TreeLoadError(f"[project] in {path} is not a table")

    name = project.get("name") or path.parent.name
    if not isinstance(name, str):
        raise TreeLoadError(f"[project].name in {path} must be a string")

    groups = {"": _as_requirement_list(project.get("dependencies", []), path)}
    if include_extras:
        optional = project.get("optional-dependencies", {})
        if not isinstance(optional, dict):
            raise TreeLoadError(f"[project.optional-dependencies] in {path} is not a table")
        for extra, requirements in optional.items():
            groups[extra] = _as_requirement_list(requirements, path)
    return name, groups


def _as_requirement_list(value, path: Path) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TreeLoadError(f"Dependencies in {path} must be a list of strings")
    return value


def read_requirements_file(path: Path) -> list[str]:
    """Read requirement lines, skipping comments and pip options."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TreeLoadError(f"Cannot read {path}: {e}") from e

    requirements = []
    for raw in text.splitlines():
        line = raw.split(" #", 1)[0].strip()
        if not line or line.startswith(("#", "-")):
            continue
        requirements.append(line)
    return requirements


class _Resolver:
    """Expands requirements into tree nodes from installed distributions."""

    def __init__(self, tree: DependencyTree, max_depth: int) -> None:
        self.tree = tree
        self.max_depth = max_depth
        self.expanded: set[str] = set()

    def add_requirements(self, parent: NodeId, requirements: list[str], depth: int,
                         extras: frozenset[str] = frozenset()) -> None:
        for line in requirements:
            requirement = parse_requirement(line)
            if requirement is None:
                log.warning("Skipping unparseable requirement %r", line)
                continue
            if not requirement_applies(requirement, extras):
                log.debug("Skipping %s: marker %s does not apply", requirement.name, requirement.marker)
                continue
            self.add_distribution(parent, requirement, line.strip(), depth)

    def add_distribution(self, parent: NodeId, requirement: Requirement, specifier: str,
                         depth: int) -> None:
        name = requirement.name
        key = canonicalize_name(name)
        try:
            dist = metadata.distribution(name)
        except metadata.PackageNotFoundError:
            log.debug("Distribution %s is not installed", name)
            self.tree.add_node(name, parent, specifier=specifier, missing=True)
            return

        display_name = dist.name or name
        if key in self.expanded:
            self.tree.add_node(display_name, parent, version=dist.version,
                               specifier=specifier, duplicate=True)
            return

        node_id = self.tree.add_node(display_name, parent, version=dist.version, specifier=specifier)
        self.expanded.add(key)
        if depth < self.max_depth:
            self.add_requirements(node_id, dist.requires or [], depth + 1,
                                  frozenset(requirement.extras))


def load_dependency_tree(
    path: Path | None = None,
    *,
    include_extras: bool = False,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> DependencyTree:
    """Load the dependency tree for a manifest, discovering it if path is None."""
    manifest = resolve_manifest(path)
    log.info("Loading dependency tree from %s", manifest)

    if manifest.name.endswith(".toml"):
        project_name, groups = read_pyproject(manifest, include_extras)
    else:
        project_name = manifest.parent.resolve().name
        groups = {"": read_requirements_file(manifest)}

    tree = DependencyTree(name=project_name, manifest_path=manifest)
    root = tree.add_node(project_name)
    resolver = _Resolver(tree, max_depth)
    for extra, requirements in groups.items():
        if extra:
            group = tree.add_node(f"[{extra}]", root)
            resolver.add_requirements(group, requirements, 1)
        else:
            resolver.add_requirements(root, requirements, 1)

    log.info("Loaded %d nodes for %s", len(tree), project_name)
    return tree
