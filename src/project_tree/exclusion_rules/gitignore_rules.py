"""Matching of paths against the patterns of a ``.gitignore`` file."""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError  # type: ignore

from project_tree.types import PathType

from .base_rules import BaseExclusionRules, normalize_relative_path

logger = logging.getLogger(__name__)


def is_negated(line: str) -> bool:
    """True for ``!pattern`` lines. An escaped ``\\!`` is a literal and does not count."""
    return line.strip().startswith("!")


class GitignorePatternSet(BaseExclusionRules):
    """The rules of one ``.gitignore`` file, matched with the pathspec library.

    Patterns follow the full .gitignore syntax supported by pathspec (globs, bracket
    expressions, ``**``, anchoring with ``/``, directory-only patterns ending in ``/``,
    backslash escapes) with one exception: negated lines (``!pattern``) are dropped, so
    they never re-include anything and rule order does not matter.

    A path matches if any rule matches it or any of its parent directories, since git
    never looks inside an ignored directory.

    Attributes:
        patterns (List[str]): The usable lines in file order.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.
        source (Optional[str]): The file the rules were read from, if any.

    Example:
        >>> rules = GitignorePatternSet.from_lines(["# build output", "/target", "cache", "!keep"])
        >>> rules.patterns
        ['/target', 'cache']
        >>> rules.matches("target", is_directory=True)
        True
        >>> rules.matches("sub/target", is_directory=True)
        False
        >>> rules.matches("sub/cache/data.bin", is_directory=False)
        True
    """

    def __init__(self, source: Optional[str] = None):
        self.patterns: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])
        self.source = source

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: Optional[str] = None) -> "GitignorePatternSet":
        """Build a pattern set from the lines of a ``.gitignore`` file."""
        pattern_set = cls(source=source)
        for line in lines:
            pattern_set.add_rule(line)
        return pattern_set

    @classmethod
    def load(cls, path: PathType) -> Optional["GitignorePatternSet"]:
        """Read a ``.gitignore`` file.

        A missing or unreadable file is not an error: None is returned and the caller
        carries on without gitignore handling.

        Args:
            path: Location of the ``.gitignore`` file.

        Returns:
            The parsed pattern set, or None if the file could not be read.
        """
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            logger.info("Not using %s: %s", path, e)
            return None
        return cls.from_lines(data.decode("utf-8", errors="replace").splitlines(), source=str(path))

    def add_rule(self, rule: str) -> None:
        """Add a single ``.gitignore`` line.

        Blank lines, comments, negated patterns and patterns pathspec rejects are skipped.
        """
        if is_negated(rule):
            return
        try:
            pattern = GitWildMatchPattern(rule)
        except GitWildMatchPatternError as e:
            logger.info("Skipping unusable .gitignore pattern %r: %s", rule, e)
            return
        # Comments, blank lines and a lone "/" compile to a pattern that matches nothing
        if pattern.include is None:
            return

        # Ensure patterns is a list that supports append
        if not hasattr(self.spec.patterns, "append"):
            self.spec.patterns = list(self.spec.patterns)

        self.spec.patterns.append(pattern)
        self.patterns.append(rule)

    def has_rules(self) -> bool:
        return bool(self.patterns)

    def matches(self, relative_path: str, is_directory: bool) -> bool:
        path = normalize_relative_path(relative_path)
        if not path or not self.patterns:
            return False

        segments = path.split("/")
        for depth in range(1, len(segments)):
            if self.spec.match_file("/".join(segments[:depth]) + "/"):
                return True
        # Directory-only patterns ("build/") need the trailing slash to match
        return bool(self.spec.match_file(path + "/" if is_directory else path))
