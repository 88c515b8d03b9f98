"""Report grouping and rendering."""

from classdiff.report.grouper import GroupedReport, group_identifiers, split_identifier
from classdiff.report.render import (
    render_flat,
    render_grouped,
    render_header,
    render_json,
    render_transition,
)

__all__ = [
    "GroupedReport",
    "group_identifiers",
    "render_flat",
    "render_grouped",
    "render_header",
    "render_json",
    "render_transition",
    "split_identifier",
]
