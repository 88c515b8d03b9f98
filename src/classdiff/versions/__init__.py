"""Version ordering."""

from classdiff.versions.ordering import (
    Ordering,
    compare_versions,
    filter_versions,
    sort_versions,
    version_key,
)

__all__ = [
    "Ordering",
    "compare_versions",
    "filter_versions",
    "sort_versions",
    "version_key",
]
