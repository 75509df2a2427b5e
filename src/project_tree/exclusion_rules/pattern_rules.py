"""Explicit ignore and stop lists given on the command line."""

from typing import List, Optional, Sequence

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from .base_rules import BaseExclusionRules, normalize_relative_path


def normalize_pattern(pattern: str) -> str:
    """Normalize a user-supplied path pattern.

    Backslashes become forward slashes and a leading ``./`` is removed, so ``./target``
    and ``target`` mean the same thing. Leading and trailing ``/`` are kept because they
    carry meaning in gitignore syntax.

    Example:
        >>> normalize_pattern("./src/main.rs")
        'src/main.rs'
        >>> normalize_pattern("build/")
        'build/'
    """
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern


class PathPatternRules(BaseExclusionRules):
    """A list of gitignore-style path patterns supplied by the user.

    This is used for both the ``--ignore`` and the ``--stop`` lists. Patterns follow
    .gitignore syntax and are matched with the pathspec library:

    - A bare name (``main.rs``, ``target``) matches that base name at any depth
    - A pattern with a ``/`` (``src/main.rs``) matches relative to the traversal root
    - A trailing ``/`` (``build/``) restricts the match to directories
    - Globs (``*.log``, ``**/fixtures``) work as in .gitignore

    Attributes:
        patterns (List[str]): The normalized patterns in the order they were added.
        spec (PathSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = PathPatternRules(["./src/main.rs", "Cargo.lock"])
        >>> rules.matches("src/main.rs", is_directory=False)
        True
        >>> rules.matches("other/main.rs", is_directory=False)
        False
        >>> rules.matches("nested/Cargo.lock", is_directory=False)
        True
    """

    def __init__(self, patterns: Optional[Sequence[str]] = None):
        """Initialize the rules with an optional sequence of patterns.

        Args:
            patterns: Patterns to add, in order. Empty patterns are skipped.
        """
        self.patterns: List[str] = []
        self.spec = PathSpec.from_lines(GitWildMatchPattern, [])

        if patterns is not None:
            for pattern in patterns:
                self.add_rule(pattern)

    def add_rule(self, rule: str) -> None:
        """Add a single pattern.

        Args:
            rule: A gitignore-style pattern, e.g. ``"target"``, ``"./src/main.rs"`` or
                ``"*.log"``. Patterns that normalize to nothing (``""``, ``"./"``) are ignored.
        """
        normalized = normalize_pattern(rule)
        if not normalized or normalized == ".":
            return

        # Ensure patterns is a list that supports append
        if not hasattr(self.spec.patterns, "append"):
            self.spec.patterns = list(self.spec.patterns)

        self.spec.patterns.append(GitWildMatchPattern(normalized))
        self.patterns.append(normalized)

    def has_rules(self) -> bool:
        return bool(self.patterns)

    def matches(self, relative_path: str, is_directory: bool) -> bool:
        path = normalize_relative_path(relative_path)
        if not path or not self.patterns:
            return False
        # Directory-only patterns ("build/") need the trailing slash to match
        return bool(self.spec.match_file(path + "/" if is_directory else path))
