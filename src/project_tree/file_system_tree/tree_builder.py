"""Recursive construction of the tree from the filesystem.

This module walks a directory, asks an :class:`EntryFilter` about every entry, orders
siblings and builds :class:`TreeNode` objects. Only a failure to read the root itself
is reported to the caller; unreadable subdirectories are kept as empty, unexpanded
nodes so one bad directory never aborts the whole listing.
"""

import logging
import os
from pathlib import Path
from typing import Callable, List, Tuple

from project_tree.config import TreeConfig
from project_tree.exclusion_rules.entry_filter import EntryClass, EntryFilter
from project_tree.types import DirectoryEntry, NodeKind, PathType

from .tree_node import TreeNode

logger = logging.getLogger(__name__)

DirectoryLister = Callable[[Path], List[DirectoryEntry]]


def list_directory(path: Path) -> List[DirectoryEntry]:
    """List a directory without following symbolic links.

    Args:
        path: Directory to list.

    Returns:
        One entry per child, in the order the operating system returns them.

    Raises:
        OSError: If the directory cannot be read.
    """
    entries = []
    with os.scandir(path) as it:
        for dir_entry in it:
            try:
                is_dir = dir_entry.is_dir(follow_symlinks=False)
                is_symlink = dir_entry.is_symlink()
            except OSError:
                # Entry vanished or cannot be inspected; list it as a plain file
                is_dir, is_symlink = False, False
            kind = NodeKind.DIRECTORY if is_dir else NodeKind.FILE
            entries.append(DirectoryEntry(dir_entry.name, kind, is_symlink))
    return entries


class TreeBuilder:
    """Builds the in-memory tree for a root directory.

    Sibling order is fixed before any child is expanded: with ``prioritize_dirs`` all
    directories come before files, otherwise both kinds are mixed. Within a group names
    are compared case-sensitively by code point, so ``README.md`` sorts before
    ``cache``.

    Symbolic links are never followed; they become file nodes.

    Attributes:
        config (TreeConfig): Resolved configuration.
        entry_filter (EntryFilter): Classifier consulted for every entry.
        lister (DirectoryLister): Function used to list a directory.

    Example:
        >>> builder = TreeBuilder(TreeConfig(), EntryFilter(TreeConfig()))  # doctest: +SKIP
        >>> root = builder.build("src")  # doctest: +SKIP
        >>> [child.name for child in root.children]  # doctest: +SKIP
        ['main.rs']
    """

    def __init__(
        self,
        config: TreeConfig,
        entry_filter: EntryFilter,
        lister: DirectoryLister = list_directory,
    ) -> None:
        self.config = config
        self.entry_filter = entry_filter
        self.lister = lister

    def build(self, root_path: PathType) -> TreeNode:
        """Build the tree for ``root_path``.

        The returned root is named after the resolved root directory when
        ``include_root`` is set and is an unnamed container otherwise.

        Args:
            root_path: The directory to walk.

        Returns:
            The root node.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            PermissionError: If the root directory cannot be read.
        """
        root = Path(root_path)
        if not root.exists():
            raise FileNotFoundError(f"Root path does not exist: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {root}")

        name = root.resolve().name if self.config.include_root else ""
        node = TreeNode(name, kind=NodeKind.DIRECTORY, recurse=True)

        # Errors reading the root itself propagate to the caller
        entries = self.lister(root)
        self._add_children(node, root, "", entries)
        return node

    def sort_key(self, entry: DirectoryEntry) -> Tuple[bool, str]:
        """Sort key placing directories first when ``prioritize_dirs`` is set."""
        if self.config.prioritize_dirs:
            return (not entry.is_dir, entry.name)
        return (False, entry.name)

    def _add_children(
        self, node: TreeNode, path: Path, relative_path: str, entries: List[DirectoryEntry]
    ) -> None:
        kept = []
        for entry in entries:
            child_relative = f"{relative_path}/{entry.name}" if relative_path else entry.name
            classification = self.entry_filter.classify(entry, child_relative)
            if classification is not EntryClass.EXCLUDED:
                kept.append((entry, child_relative, classification))

        kept.sort(key=lambda item: self.sort_key(item[0]))

        for entry, child_relative, classification in kept:
            expand = entry.is_dir and classification is not EntryClass.STOPPED
            child = TreeNode(
                entry.name,
                parent=node,
                kind=entry.kind,
                style=self.entry_filter.style(entry, child_relative, classification),
                recurse=expand,
                is_symlink=entry.is_symlink,
            )
            if not expand:
                continue

            child_path = path / entry.name
            try:
                child_entries = self.lister(child_path)
            except OSError as e:
                logger.info("Cannot read %s, listing it without contents: %s", child_path, e)
                child.recurse = False
                continue
            self._add_children(child, child_path, child_relative, child_entries)
