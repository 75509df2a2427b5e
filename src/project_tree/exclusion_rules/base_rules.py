from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class for pattern rules that can be asked about a single path.

    Implementations decide whether a path, given relative to the traversal root with
    forward slashes, is matched by their patterns. What a match *means* (leave the
    entry out, stop recursing, dim it) is decided by the caller; see
    :class:`~project_tree.exclusion_rules.entry_filter.EntryFilter`.

    Individual rule addition is an optional capability that depends on the rule type.

    Example:
        >>> from project_tree.exclusion_rules.gitignore_rules import GitignorePatternSet
        >>> rules = GitignorePatternSet.from_lines(["*.pyc", "build/"])
        >>> rules.matches("pkg/mod.pyc", is_directory=False)
        True
        >>> rules.matches("build", is_directory=False)
        False
        >>> rules.matches("build", is_directory=True)
        True
    """

    @abstractmethod
    def matches(self, relative_path: str, is_directory: bool) -> bool:
        """
        Determine whether a path is matched by any of the rules.

        Args:
            relative_path (str): The path to check, relative to the traversal root and
                using ``/`` as the separator. A leading ``./`` is tolerated.
            is_directory (bool): Whether the path names a directory. Directory-only
                patterns (those ending in ``/``) only match directories.

        Returns:
            bool: True if the path is matched, False otherwise.
        """
        pass

    @abstractmethod
    def has_rules(self) -> bool:
        """Return True if at least one usable rule has been configured."""
        pass

    def add_rule(self, rule: str) -> None:
        """
        Add a single rule directly.

        Rule types that are fixed at construction use this default implementation.

        Args:
            rule (str): The rule to add, in the syntax of the concrete rule type.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")


def normalize_relative_path(path: str) -> str:
    """Bring a user- or walker-supplied relative path into ``a/b/c`` form.

    Example:
        >>> normalize_relative_path("./src/main.rs")
        'src/main.rs'
        >>> normalize_relative_path("target/")
        'target'
        >>> normalize_relative_path("docs\\\\api")
        'docs/api'
    """
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path.strip("/")
