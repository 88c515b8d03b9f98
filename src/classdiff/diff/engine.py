"""Set diff between two release indexes.

Pure function over two unit -> fingerprint mappings; no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping

from classdiff.index.models import DiffResult, Fingerprint, UnitIdentifier


def diff_indexes(
    old: Mapping[UnitIdentifier, Fingerprint],
    new: Mapping[UnitIdentifier, Fingerprint],
) -> DiffResult:
    """Classify every unit of ``old`` and ``new``.

    - added: in ``new`` only
    - removed: in ``old`` only
    - modified: in both, fingerprints differ
    """
    added: list[UnitIdentifier] = []
    modified: list[UnitIdentifier] = []

    for unit, new_fp in new.items():
        if unit not in old:
            added.append(unit)
        elif old[unit] != new_fp:
            modified.append(unit)

    removed = [unit for unit in old if unit not in new]

    return DiffResult(
        added=tuple(sorted(added)),
        removed=tuple(sorted(removed)),
        modified=tuple(sorted(modified)),
    )
