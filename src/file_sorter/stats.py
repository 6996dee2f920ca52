"""
Per-category statistics for a run.
"""

from typing import Dict, List, Optional

from .types import FileStats


class StatisticsAggregator:
    """
    Tracks file count and byte total per category.

    Entries are created on first use and never removed.
    """

    def __init__(self):
        self._stats: Dict[str, FileStats] = {}

    def record(self, category: str, size_bytes: int) -> None:
        """Count one file of ``size_bytes`` bytes under ``category``."""
        stats = self._stats.get(category)
        if stats is None:
            stats = FileStats()
            self._stats[category] = stats
        stats.count += 1
        stats.total_size += size_bytes

    def get(self, category: str) -> Optional[FileStats]:
        return self._stats.get(category)

    def categories(self) -> List[str]:
        """Category names with at least one recorded file, sorted."""
        return sorted(self._stats)

    @property
    def total_count(self) -> int:
        return sum(s.count for s in self._stats.values())

    @property
    def total_size(self) -> int:
        return sum(s.total_size for s in self._stats.values())

    def as_dict(self) -> Dict[str, Dict[str, int]]:
        """
        Get statistics as plain dictionaries.

        Returns:
            Dictionary mapping category to {"count": ..., "total_size": ...}
        """
        return {
            category: {"count": s.count, "total_size": s.total_size}
            for category, s in self._stats.items()
        }

    def __len__(self) -> int:
        return len(self._stats)

    def __contains__(self, category: str) -> bool:
        return category in self._stats
