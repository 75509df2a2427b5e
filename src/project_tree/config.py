"""Resolved configuration for a tree run.

The command line is parsed elsewhere; this module turns the resulting flags into an
immutable :class:`TreeConfig` and keeps the small derivations (which default names are
excluded, whether the root is a Rust project, which gitignore mode applies) as pure
functions so they can be tested without touching a real directory tree.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import AbstractSet, FrozenSet, Iterable, Optional, Tuple

from project_tree.types import GitignoreMode, PathType

# Names hidden unless explicitly requested
DEFAULT_EXCLUSIONS: Tuple[str, ...] = ("node_modules", ".git", ".vscode")

# Only hidden when the root holds a Cargo.toml
RUST_TARGET = "target"
RUST_MANIFEST = "Cargo.toml"

GITIGNORE_FILE = ".gitignore"


def effective_exclusions(included_defaults: AbstractSet[str], rust_target_special_case: bool) -> FrozenSet[str]:
    """Compute the set of base names that are always left out of the tree.

    Args:
        included_defaults: Default names the user asked to see anyway.
        rust_target_special_case: Whether the traversal root is a Rust project.

    Returns:
        The default exclusions minus the included ones, plus ``target`` for Rust
        projects unless it was included.

    Example:
        >>> sorted(effective_exclusions(set(), rust_target_special_case=False))
        ['.git', '.vscode', 'node_modules']
        >>> sorted(effective_exclusions({".git"}, rust_target_special_case=True))
        ['.vscode', 'node_modules', 'target']
    """
    names = set(DEFAULT_EXCLUSIONS)
    if rust_target_special_case:
        names.add(RUST_TARGET)
    return frozenset(names - set(included_defaults))


def is_rust_project(root: PathType) -> bool:
    """Return True if ``root`` contains a ``Cargo.toml`` file."""
    # An unreadable root counts as having no manifest
    return os.path.isfile(Path(root) / RUST_MANIFEST)


def resolve_gitignore_mode(requested: Optional[GitignoreMode], gitignore_available: bool) -> GitignoreMode:
    """Decide which gitignore mode is in effect.

    Args:
        requested: The mode asked for, or None for automatic selection.
        gitignore_available: Whether a readable ``.gitignore`` was found at the root.

    Returns:
        OFF whenever no ``.gitignore`` is available; otherwise the requested mode, with
        DIM as the automatic choice.

    Example:
        >>> resolve_gitignore_mode(None, True)
        <GitignoreMode.DIM: 'dim'>
        >>> resolve_gitignore_mode(GitignoreMode.STOP, False)
        <GitignoreMode.OFF: 'off'>
    """
    if not gitignore_available:
        return GitignoreMode.OFF
    if requested is None:
        return GitignoreMode.DIM
    return requested


@dataclass(frozen=True)
class TreeConfig:
    """Immutable options for building and rendering one tree.

    Attributes:
        included_defaults (FrozenSet[str]): Default-excluded names the user wants shown
            (any of ``node_modules``, ``.git``, ``.vscode``, ``target``).
        ignore (Tuple[str, ...]): Patterns of entries to leave out entirely.
        stop (Tuple[str, ...]): Patterns of directories to list without expanding.
        gitignore_mode (Optional[GitignoreMode]): Requested handling of ``.gitignore``
            matches; None selects DIM when a ``.gitignore`` exists.
        prioritize_dirs (bool): List directories before files.
        include_root (bool): Show the root directory as the first line.
        rust_target_special_case (bool): The root is a Rust project, so ``target`` is
            excluded by default.

    Example:
        >>> config = TreeConfig(ignore=("Cargo.lock",), rust_target_special_case=True)
        >>> "target" in config.excluded_names
        True
        >>> config.ignore
        ('Cargo.lock',)
    """

    included_defaults: FrozenSet[str] = field(default_factory=frozenset)
    ignore: Tuple[str, ...] = ()
    stop: Tuple[str, ...] = ()
    gitignore_mode: Optional[GitignoreMode] = None
    prioritize_dirs: bool = False
    include_root: bool = False
    rust_target_special_case: bool = False

    @property
    def excluded_names(self) -> FrozenSet[str]:
        return effective_exclusions(self.included_defaults, self.rust_target_special_case)

    @classmethod
    def from_flags(
        cls,
        root: PathType,
        *,
        show_node_modules: bool = False,
        show_git: bool = False,
        show_vscode: bool = False,
        show_target: bool = False,
        ignore: Iterable[str] = (),
        stop: Iterable[str] = (),
        gitignore_mode: Optional[GitignoreMode] = None,
        prioritize_dirs: bool = False,
        include_root: bool = False,
    ) -> "TreeConfig":
        """Build a configuration from command-line style flags.

        The only filesystem access is the ``Cargo.toml`` check at ``root``.
        """
        shown = {
            "node_modules": show_node_modules,
            ".git": show_git,
            ".vscode": show_vscode,
            RUST_TARGET: show_target,
        }
        return cls(
            included_defaults=frozenset(name for name, show in shown.items() if show),
            ignore=tuple(ignore),
            stop=tuple(stop),
            gitignore_mode=gitignore_mode,
            prioritize_dirs=prioritize_dirs,
            include_root=include_root,
            rust_target_special_case=is_rust_project(root),
        )
