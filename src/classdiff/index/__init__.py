"""Release indexing: data model and the two content indexers."""

from classdiff.index.indexers import (
    BinaryUnitIndexer,
    ContentIndexer,
    SourceTree,
    SourceUnitIndexer,
    source_fingerprint,
)
from classdiff.index.models import (
    DiffResult,
    Fingerprint,
    ReleaseIndex,
    Transition,
    UnitIdentifier,
    binary_fingerprint,
)

__all__ = [
    "BinaryUnitIndexer",
    "ContentIndexer",
    "DiffResult",
    "Fingerprint",
    "ReleaseIndex",
    "SourceTree",
    "SourceUnitIndexer",
    "Transition",
    "UnitIdentifier",
    "binary_fingerprint",
    "source_fingerprint",
]
