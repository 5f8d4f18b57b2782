"""
Event Topics for ncol

All pub/sub topics are defined here for easy discovery and documentation.
Topic naming convention: <category>.<action>

Each topic is always published with the same keyword arguments, listed
in its docstring.
"""

# Snapshot events
SNAPSHOT_TAKEN = "snapshot.taken"
"""Published after windows and workspaces were queried. Params: workspace, windows"""

# Plan events
PLAN_EMPTY = "plan.empty"
"""Published when the focused workspace has no windows. Params: workspace"""

PLAN_COMPUTED = "plan.computed"
"""Published once the column plan is known. Params: plan"""

# Phase events
FLATTEN_STARTED = "phase.flatten"
"""Published before every window is expelled into its own column. Params: plan"""

BUILD_STARTED = "phase.build"
"""Published before columns are rebuilt. Params: plan"""

# Column events
COLUMN_BUILDING = "column.building"
"""Published before a column is built. Params: index, window_ids"""

# Action events
ACTION_REJECTED = "action.rejected"
"""Published when niri answers an action with Err. Params: action, message"""

# Lifecycle events
ARRANGE_FINISHED = "arrange.finished"
"""Published when the arrangement is complete. Params: plan, dry_run"""
