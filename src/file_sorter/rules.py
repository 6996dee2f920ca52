"""
Extension-to-category rule table.

Files are classified purely by extension. Lookups are case-insensitive and
anything without a rule lands in the fallback category.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional

OTHER_CATEGORY = "other"

DEFAULT_RULES: Mapping[str, str] = MappingProxyType({
    ".jpg": "Images",
    ".jpeg": "Images",
    ".png": "Images",
    ".txt": "Documents",
    ".docx": "Documents",
    ".doc": "Documents",
    ".pdf": "Documents",
    ".mp3": "Music",
    ".wav": "Music",
    ".mp4": "Video",
    ".avi": "Video",
    ".zip": "Archives",
    ".rar": "Archives",
})


@dataclass(frozen=True)
class RuleTable:
    """
    Immutable mapping from lower-case extension (with leading dot) to
    category name.

    Args:
        rules: Extension to category mapping. Keys are lower-cased on
               construction so callers may pass ".JPG" style keys.
        fallback: Category returned for extensions with no rule
    """
    rules: Mapping[str, str] = field(default_factory=lambda: DEFAULT_RULES)
    fallback: str = OTHER_CATEGORY

    def __post_init__(self):
        normalized = {ext.lower(): category for ext, category in self.rules.items()}
        object.__setattr__(self, "rules", MappingProxyType(normalized))

    def classify(self, extension: Optional[str]) -> str:
        """Return the category for an extension such as ".PDF"."""
        if not extension:
            return self.fallback
        return self.rules.get(extension.lower(), self.fallback)

    @property
    def category_names(self) -> FrozenSet[str]:
        """
        Folder names treated as already-sorted category folders.

        Only rule targets count. The fallback folder is walked like any
        other, so files already in ``other/`` are renamed in place on a re-run.
        """
        return frozenset(self.rules.values())


DEFAULT_RULE_TABLE = RuleTable()


def classify(extension: Optional[str]) -> str:
    """Classify an extension with the default rule table."""
    return DEFAULT_RULE_TABLE.classify(extension)
