"""Compaction scan over an ordered release history.

Instead of diffing every adjacent pair, the scan keeps a baseline (the last
release it reported, initially the first one) and compares each later
release against it. Content-identical releases are passed over without
moving the baseline, so a run of metadata-only releases collapses into the
single transition where content actually changed.

Failure policy:
- Fetch or indexing failure of the first release aborts the scan with
  ScanAbortedError before anything is yielded.
- Any candidate failure, including the second release, skips that
  candidate; the baseline stays where it is.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

import structlog

from classdiff.core.errors import FetchError, IndexingError, InternalError, ScanAbortedError
from classdiff.diff.engine import diff_indexes
from classdiff.index.models import ReleaseIndex, Transition
from classdiff.versions.ordering import filter_versions

log = structlog.get_logger(__name__)

IndexLoader = Callable[[str], ReleaseIndex]
"""Fetch and index one release. Raises FetchError or IndexingError."""


@dataclass(frozen=True, slots=True)
class ScanCursor:
    """Scan state threaded from one step to the next.

    ``baseline`` is a position in the filtered release list. ``index`` is the
    baseline's ReleaseIndex once it has been built.
    """

    baseline: int = 0
    index: ReleaseIndex | None = None


def _load_baseline(cursor: ScanCursor, releases: Sequence[str], load: IndexLoader) -> ScanCursor:
    if cursor.index is not None:
        return cursor
    return ScanCursor(baseline=cursor.baseline, index=load(releases[cursor.baseline]))


def step(
    cursor: ScanCursor,
    releases: Sequence[str],
    position: int,
    load: IndexLoader,
) -> tuple[ScanCursor, Transition | None]:
    """Compare ``releases[position]`` against the cursor's baseline.

    Returns the next cursor and the transition to report, if any. Load
    failures propagate to the caller unchanged.

    Raises:
        InternalError: The loader returned nothing for the baseline.
    """
    cursor = _load_baseline(cursor, releases, load)
    candidate = load(releases[position])

    if cursor.index is None:
        raise InternalError.unexpected(
            "loader returned no index", release=releases[cursor.baseline]
        )
    diff = diff_indexes(cursor.index, candidate)
    if diff.is_empty:
        log.debug(
            "release_unchanged",
            baseline=releases[cursor.baseline],
            candidate=releases[position],
        )
        return cursor, None

    transition = Transition(older=releases[cursor.baseline], newer=releases[position], diff=diff)
    return ScanCursor(baseline=position, index=candidate), transition


def scan(
    releases: Sequence[str],
    load: IndexLoader,
    from_version: str | None = None,
    to_version: str | None = None,
) -> Iterator[Transition]:
    """Lazily yield transitions whose content differs, in ascending order.

    ``releases`` must already be sorted with the version ordering; the
    ``from_version``/``to_version`` range is applied here. Fewer than two
    releases in range yields nothing.

    Raises:
        ScanAbortedError: The first release could not be loaded.
    """
    candidates = filter_versions(releases, from_version, to_version)
    if len(candidates) < 2:
        log.info("scan_too_few_releases", count=len(candidates))
        return

    cursor = ScanCursor()
    for position in range(1, len(candidates)):
        try:
            cursor = _load_baseline(cursor, candidates, load)
            cursor, transition = step(cursor, candidates, position, load)
        except (FetchError, IndexingError) as e:
            if cursor.index is None:
                log.warning("scan_aborted", release=candidates[0], error=e.error_name)
                raise ScanAbortedError.first_comparison(candidates[0], e) from e
            log.warning(
                "comparison_skipped",
                baseline=candidates[cursor.baseline],
                candidate=candidates[position],
                error=e.error_name,
                reason=e.message,
            )
            continue

        if transition is not None:
            log.info(
                "transition_found",
                older=transition.older,
                newer=transition.newer,
                added=len(transition.diff.added),
                removed=len(transition.diff.removed),
                modified=len(transition.diff.modified),
            )
            yield transition
