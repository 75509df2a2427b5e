"""Rules deciding which entries appear in the tree and how."""

from .base_rules import BaseExclusionRules
from .entry_filter import EntryClass, EntryFilter
from .gitignore_rules import GitignorePatternSet
from .pattern_rules import PathPatternRules

__all__ = [
    "BaseExclusionRules",
    "EntryClass",
    "EntryFilter",
    "GitignorePatternSet",
    "PathPatternRules",
]
