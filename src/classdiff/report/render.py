"""Line-oriented rendering of transitions."""

from __future__ import annotations

import json
from collections.abc import Sequence

from classdiff.index.models import Transition
from classdiff.report.grouper import DEFAULT_MARKERS, group_identifiers

_SECTIONS = (
    ("ADDED", "added", "+"),
    ("REMOVED", "removed", "-"),
    ("MODIFIED", "modified", "*"),
)


def render_header(transition: Transition) -> str:
    return f"===== {transition.older}  ->  {transition.newer} ====="


def render_flat(items: Sequence[str], marker: str, limit: int | None) -> list[str]:
    """One line per item, truncated at ``limit`` with a trailing count."""
    shown = items if limit is None else items[:limit]
    lines = [f"  {marker} {item}" for item in shown]
    if len(items) > len(shown):
        lines.append(f"  ... and {len(items) - len(shown)} more")
    return lines


def render_grouped(
    items: Sequence[str],
    marker: str,
    limit: int | None,
    markers: Sequence[str] = DEFAULT_MARKERS,
) -> list[str]:
    """Module headers with indented members; ungrouped items flush left."""
    report = group_identifiers(items, limit=limit, markers=markers)
    lines: list[str] = []
    for key, suffixes in report.groups:
        if key:
            lines.append(f"  {key}:")
            lines.extend(f"    {marker} {suffix}" for suffix in suffixes)
        else:
            lines.extend(f"  {marker} {suffix}" for suffix in suffixes)
    if report.remaining:
        lines.append(f"  ... and {report.remaining} more")
    return lines


def render_transition(
    transition: Transition,
    *,
    grouped: bool,
    limit: int | None,
    full: bool = False,
    markers: Sequence[str] = DEFAULT_MARKERS,
) -> list[str]:
    """Render one transition as text lines, ending with a blank line.

    Modified units are counted always but listed only when ``full``.
    """
    lines = [render_header(transition)]
    for title, attr, marker in _SECTIONS:
        items: tuple[str, ...] = getattr(transition.diff, attr)
        if not items:
            continue
        lines.append(f"[{title}] {len(items)}")
        if attr == "modified" and not full:
            continue
        if grouped:
            lines.extend(render_grouped(items, marker, limit, markers))
        else:
            lines.extend(render_flat(items, marker, limit))
    lines.append("")
    return lines


def render_json(transition: Transition) -> str:
    return json.dumps(
        {"from": transition.older, "to": transition.newer, **transition.diff.to_dict()},
        sort_keys=False,
    )
