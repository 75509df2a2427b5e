"""High-level entry point tying configuration, filtering, building and rendering together."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from project_tree.config import GITIGNORE_FILE, TreeConfig, resolve_gitignore_mode
from project_tree.exclusion_rules.entry_filter import EntryFilter
from project_tree.exclusion_rules.gitignore_rules import GitignorePatternSet
from project_tree.file_system_tree.tree_builder import DirectoryLister, TreeBuilder, list_directory
from project_tree.file_system_tree.tree_node import TreeNode
from project_tree.file_system_tree.tree_renderer import TreeLine, TreeRenderer
from project_tree.types import GitignoreMode, PathType

logger = logging.getLogger(__name__)


class ProjectTree:
    """Renders the tree of one project directory.

    On construction the root ``.gitignore`` is loaded (unless gitignore handling is
    turned off) and the effective gitignore mode is settled. The tree itself is built
    lazily on first access and cached; call :meth:`refresh` to rebuild it after the
    filesystem changed.

    Attributes:
        directory (Path): The directory being rendered.
        config (TreeConfig): The configuration in use.
        gitignore (Optional[GitignorePatternSet]): Rules from the root ``.gitignore``.
        gitignore_mode (GitignoreMode): The effective gitignore mode.

    Example:
        >>> project = ProjectTree(".", TreeConfig(include_root=True))  # doctest: +SKIP
        >>> print(project.render())  # doctest: +SKIP
        project
        ├── Cargo.toml
        └── src/
            └── main.rs
    """

    def __init__(
        self,
        directory: PathType,
        config: Optional[TreeConfig] = None,
        *,
        lister: DirectoryLister = list_directory,
    ) -> None:
        """Initialize the project tree.

        Args:
            directory: The directory to render. Can be any path-like object.
            config: Resolved configuration. Defaults to ``TreeConfig()``.
            lister: Function used to list directories; replaceable for testing.
        """
        self.directory = Path(directory)
        self.config = config if config is not None else TreeConfig()

        self.gitignore: Optional[GitignorePatternSet] = None
        if self.config.gitignore_mode is not GitignoreMode.OFF:
            self.gitignore = GitignorePatternSet.load(self.directory / GITIGNORE_FILE)
        self.gitignore_mode = resolve_gitignore_mode(self.config.gitignore_mode, self.gitignore is not None)
        if self.gitignore is not None and self.gitignore_mode is not GitignoreMode.OFF:
            logger.info("Using %s (mode: %s)", self.gitignore.source, self.gitignore_mode.value)

        self.entry_filter = EntryFilter(self.config, self.gitignore, self.gitignore_mode)
        self._builder = TreeBuilder(self.config, self.entry_filter, lister=lister)
        self._renderer = TreeRenderer()
        self._tree: Optional[TreeNode] = None

    def get_tree(self) -> TreeNode:
        """Get the root node, building the tree on first access.

        Raises:
            FileNotFoundError: If the directory doesn't exist.
            NotADirectoryError: If the path isn't a directory.
            PermissionError: If the directory cannot be read.
        """
        if self._tree is None:
            self._tree = self._builder.build(self.directory)
        return self._tree

    def stream_lines(self) -> Iterator[TreeLine]:
        """Generate the rendered lines with their style annotations."""
        return self._renderer.stream_lines(self.get_tree())

    def render(self) -> str:
        """Render the tree as plain text without a trailing newline."""
        return self._renderer.render(self.get_tree())

    def refresh(self) -> None:
        """Discard the cached tree so the next access reads the filesystem again."""
        self._tree = None
