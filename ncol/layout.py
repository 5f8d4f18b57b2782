"""
Column Layout

Decides how many columns to build and which windows go in each one.
Everything here is pure; the arranger turns a ColumnPlan into actions.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .errors import SemanticError
from .protocol import Window, Workspace


def num_columns(window_count: int) -> int:
    """Number of columns for ``window_count`` windows.

    ceil(sqrt(n)) keeps the grid roughly square, capped at n so no column
    is empty. Zero windows still yields one column.
    """
    if window_count <= 0:
        return 1

    # isqrt(n - 1) + 1 == ceil(sqrt(n)) for n >= 1
    cols = math.isqrt(window_count - 1) + 1

    return min(cols, window_count)


def windows_per_column(window_count: int, columns: int) -> int:
    """Largest number of windows any column receives (ceiling division)."""
    return (window_count + columns - 1) // columns


def column_ranges(window_count: int) -> List[Tuple[int, int]]:
    """Half-open ``(start, end)`` window index ranges, one per column.

    Columns are filled left to right in query order; the last one may be
    shorter. Stops early rather than emit an empty column.
    """
    if window_count <= 0:
        return []

    cols = num_columns(window_count)
    per_column = windows_per_column(window_count, cols)

    ranges = []
    for i in range(cols):
        start = i * per_column
        if start >= window_count:
            break
        end = min((i + 1) * per_column, window_count)
        ranges.append((start, end))

    return ranges


@dataclass
class ColumnPlan:
    """Target arrangement for the windows of one workspace."""

    window_ids: List[int]
    num_columns: int
    windows_per_column: int
    ranges: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def window_count(self) -> int:
        return len(self.window_ids)

    @property
    def column_width(self) -> float:
        """Width of each column as a percentage of the output."""
        return 100.0 / self.num_columns

    @property
    def distribution(self) -> List[int]:
        return [end - start for start, end in self.ranges]

    @property
    def columns(self) -> List[List[int]]:
        return [self.window_ids[start:end] for start, end in self.ranges]


def plan_columns(window_ids: Sequence[int]) -> ColumnPlan:
    ids = list(window_ids)
    cols = num_columns(len(ids))
    return ColumnPlan(
        window_ids=ids,
        num_columns=cols,
        windows_per_column=windows_per_column(len(ids), cols),
        ranges=column_ranges(len(ids)),
    )


def focused_workspace(workspaces: Sequence[Workspace], strict: bool = True) -> Workspace:
    """Return the focused workspace.

    Raises:
        SemanticError: if none is focused, or if several are and ``strict``
    """
    focused = [ws for ws in workspaces if ws.is_focused]
    if not focused:
        raise SemanticError("No focused workspace found")
    if len(focused) > 1 and strict:
        ids = ", ".join(str(ws.id) for ws in focused)
        raise SemanticError(f"Several workspaces report focus: {ids}")
    return focused[0]


def windows_on_workspace(windows: Sequence[Window], workspace_id: int) -> List[Window]:
    return [w for w in windows if w.workspace_id is not None and w.workspace_id == workspace_id]
