"""
Column Arranger

Drives niri through the action sequence that turns the focused workspace
into the columns of a ColumnPlan.
"""

from __future__ import annotations
from typing import List, Optional, Tuple

from pubsub import pub

from . import topics
from .layout import ColumnPlan, focused_workspace, plan_columns, windows_on_workspace
from .protocol import (
    Action,
    ColumnDisplay,
    ConsumeWindowIntoColumn,
    Err,
    ExpelWindowFromColumn,
    FocusColumn,
    FocusColumnFirst,
    FocusWindow,
    SetColumnDisplay,
    SetWindowWidth,
    SizeChange,
    Window,
    Workspace,
)


class ColumnArranger:
    """Arranges the windows of the focused workspace into columns.

    Responsibilities:
    - Query a consistent snapshot (windows, then workspaces)
    - Compute the ColumnPlan
    - Flatten: focus and expel every window into its own column
    - Build: focus, normalize, size and fill each target column
    - Reset focus to the first column

    Err replies to individual actions are published as ACTION_REJECTED and
    otherwise ignored; transport failures propagate.
    """

    def __init__(
        self,
        connection,
        bus=pub,
        column_display: ColumnDisplay = ColumnDisplay.NORMAL,
        strict_focus: bool = True,
        dry_run: bool = False,
    ):
        """Initialize the arranger.

        Args:
            connection: Connected NiriConnection (or anything with the same
                query_windows/query_workspaces/action methods)
            bus: Event bus instance (Pypubsub)
            column_display: Display mode set on every built column
            strict_focus: Fail when several workspaces report focus
            dry_run: Only compute and publish the plan
        """
        self.connection = connection
        self.bus = bus
        self.column_display = column_display
        self.strict_focus = strict_focus
        self.dry_run = dry_run
        self.rejected: List[Tuple[Action, str]] = []

    def snapshot(self) -> Tuple[Workspace, List[Window]]:
        """Query niri and return the focused workspace and its windows."""
        windows = self.connection.query_windows()
        workspaces = self.connection.query_workspaces()

        workspace = focused_workspace(workspaces, strict=self.strict_focus)
        workspace_windows = windows_on_workspace(windows, workspace.id)

        self.bus.sendMessage(
            topics.SNAPSHOT_TAKEN, workspace=workspace, windows=workspace_windows
        )
        return workspace, workspace_windows

    def arrange(self) -> Optional[ColumnPlan]:
        """Run the whole arrangement.

        Returns:
            The applied plan, or None if the workspace had no windows
        """
        workspace, windows = self.snapshot()

        if not windows:
            self.bus.sendMessage(topics.PLAN_EMPTY, workspace=workspace)
            return None

        plan = plan_columns([w.id for w in windows])
        self.bus.sendMessage(topics.PLAN_COMPUTED, plan=plan)

        if not self.dry_run:
            self.flatten(plan)
            self.build(plan)
            self._act(FocusColumnFirst())

        self.bus.sendMessage(topics.ARRANGE_FINISHED, plan=plan, dry_run=self.dry_run)
        return plan

    def flatten(self, plan: ColumnPlan):
        """Give every window a column of its own."""
        self.bus.sendMessage(topics.FLATTEN_STARTED, plan=plan)

        for window_id in plan.window_ids:
            self._act(FocusWindow(id=window_id))
            self._act(ExpelWindowFromColumn())

    def build(self, plan: ColumnPlan):
        """Rebuild the target columns from left to right.

        After flattening, column ``i`` (1-based for niri) holds the first
        window of target column ``i``; consuming pulls the following
        single-window columns into it.
        """
        self.bus.sendMessage(topics.BUILD_STARTED, plan=plan)

        width = SizeChange.set_proportion(plan.column_width)
        for index, window_ids in enumerate(plan.columns):
            self.bus.sendMessage(
                topics.COLUMN_BUILDING, index=index, window_ids=window_ids
            )

            self._act(FocusColumn(index=index + 1))
            self._act(SetColumnDisplay(display=self.column_display))
            self._act(SetWindowWidth(change=width, id=None))

            for _ in range(len(window_ids) - 1):
                self._act(ConsumeWindowIntoColumn())

    def _act(self, action: Action) -> bool:
        """Issue an action, recording rather than raising on Err."""
        reply = self.connection.action(action)
        if isinstance(reply, Err):
            self.rejected.append((action, reply.message))
            self.bus.sendMessage(
                topics.ACTION_REJECTED, action=action, message=reply.message
            )
            return False
        return True
