"""Classification of directory entries into excluded, stopped, dimmed or included."""

from enum import Enum
from typing import Optional

from project_tree.config import TreeConfig
from project_tree.types import DirectoryEntry, GitignoreMode, NodeStyle

from .base_rules import BaseExclusionRules
from .pattern_rules import PathPatternRules


class EntryClass(Enum):
    """Outcome of classifying a directory entry.

    Values:
        EXCLUDED: The entry does not appear in the tree at all
        STOPPED: The entry is listed, but a directory is not expanded
        DIMMED: The entry is listed dimmed and directories are still expanded
        INCLUDED: The entry is listed normally
    """

    EXCLUDED = "excluded"
    STOPPED = "stopped"
    DIMMED = "dimmed"
    INCLUDED = "included"


class EntryFilter:
    """Decides how each filesystem entry appears in the tree.

    The checks run in a fixed order and the first one that applies wins:

    1. An explicit ignore pattern matches: EXCLUDED
    2. The base name is a default exclusion (``node_modules``, ``.git``, ``.vscode`` and,
       for Rust projects, ``target``) that was not included: EXCLUDED
    3. Gitignore mode IGNORE and the ``.gitignore`` matches: EXCLUDED
    4. An explicit stop pattern matches, or gitignore mode STOP / DIM_AND_STOP and the
       ``.gitignore`` matches: STOPPED
    5. Gitignore mode DIM / DIM_AND_STOP and the ``.gitignore`` matches: DIMMED
    6. Otherwise: INCLUDED

    An explicit ignore therefore always beats a gitignore dim. The filter is a pure
    function of its configuration and the entry.

    Attributes:
        config (TreeConfig): The resolved configuration.
        gitignore_mode (GitignoreMode): The effective gitignore mode (OFF without rules).
        gitignore (Optional[BaseExclusionRules]): The root ``.gitignore`` rules, if any.

    Example:
        >>> from project_tree.exclusion_rules.gitignore_rules import GitignorePatternSet
        >>> from project_tree.types import NodeKind
        >>> entry_filter = EntryFilter(
        ...     TreeConfig(ignore=("cache",)),
        ...     GitignorePatternSet.from_lines(["cache", "*.log"]),
        ...     GitignoreMode.DIM,
        ... )
        >>> entry_filter.classify(DirectoryEntry("cache", NodeKind.DIRECTORY), "cache")
        <EntryClass.EXCLUDED: 'excluded'>
        >>> entry_filter.classify(DirectoryEntry("app.log", NodeKind.FILE), "app.log")
        <EntryClass.DIMMED: 'dimmed'>
    """

    def __init__(
        self,
        config: TreeConfig,
        gitignore: Optional[BaseExclusionRules] = None,
        gitignore_mode: GitignoreMode = GitignoreMode.OFF,
    ) -> None:
        """Initialize the filter.

        Args:
            config: Resolved tree configuration.
            gitignore: Rules from the root ``.gitignore``. Without rules the gitignore
                mode is forced to OFF.
            gitignore_mode: The effective gitignore mode.
        """
        self.config = config
        self.gitignore = gitignore
        self.gitignore_mode = gitignore_mode if gitignore is not None else GitignoreMode.OFF
        self._ignore_rules = PathPatternRules(config.ignore)
        self._stop_rules = PathPatternRules(config.stop)
        self._excluded_names = config.excluded_names

    def classify(self, entry: DirectoryEntry, relative_path: str) -> EntryClass:
        """Classify an entry.

        Args:
            entry: The directory entry.
            relative_path: The entry's path relative to the traversal root, using ``/``.

        Returns:
            The classification of the entry.
        """
        if self._ignore_rules.matches(relative_path, entry.is_dir):
            return EntryClass.EXCLUDED
        if entry.name in self._excluded_names:
            return EntryClass.EXCLUDED

        gitignored = self._gitignored(entry, relative_path)
        if gitignored and self.gitignore_mode is GitignoreMode.IGNORE:
            return EntryClass.EXCLUDED
        if self._stop_rules.matches(relative_path, entry.is_dir) or (gitignored and self.gitignore_mode.stops):
            return EntryClass.STOPPED
        if gitignored and self.gitignore_mode.dims:
            return EntryClass.DIMMED
        return EntryClass.INCLUDED

    def style(self, entry: DirectoryEntry, relative_path: str, classification: EntryClass) -> NodeStyle:
        """Return the display style for an already classified entry.

        DIMMED entries are dimmed. A STOPPED entry is dimmed as well when the
        ``.gitignore`` matches it and the mode dims, so a stopped build directory still
        shows up as ignored.
        """
        if classification is EntryClass.DIMMED:
            return NodeStyle.DIMMED
        if (
            classification is EntryClass.STOPPED
            and self.gitignore_mode.dims
            and self._gitignored(entry, relative_path)
        ):
            return NodeStyle.DIMMED
        return NodeStyle.NORMAL

    def _gitignored(self, entry: DirectoryEntry, relative_path: str) -> bool:
        if self.gitignore is None or self.gitignore_mode is GitignoreMode.OFF:
            return False
        return self.gitignore.matches(relative_path, entry.is_dir)
