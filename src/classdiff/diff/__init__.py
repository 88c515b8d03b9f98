"""Set diff and compaction scan."""

from classdiff.diff.engine import diff_indexes
from classdiff.diff.scanner import IndexLoader, ScanCursor, scan, step
from classdiff.index.models import Transition

__all__ = [
    "IndexLoader",
    "ScanCursor",
    "Transition",
    "diff_indexes",
    "scan",
    "step",
]
