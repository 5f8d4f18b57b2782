"""
niri columns (ncol)

Arranges the windows of the focused niri workspace into balanced columns.

This package provides:
- Types and a JSON line codec for niri's IPC protocol
- A blocking connection to niri's Unix socket
- The column count and window distribution algorithm
- An arranger that applies a plan through niri actions

Example usage:
    import os
    from ncol import NiriConnection, ColumnArranger

    with NiriConnection().connect(os.environ["NIRI_SOCKET"]) as conn:
        ColumnArranger(conn).arrange()

Or run directly:
    python -m ncol
"""

__version__ = "0.1.0"

from .errors import (
    NcolError,
    ConfigurationError,
    TransportError,
    ConnectError,
    ProtocolError,
    SemanticError,
)

from .protocol import (
    ColumnDisplay,
    SizeChange,
    SizeChangeKind,
    Window,
    Workspace,
    Action,
    FocusWindow,
    ExpelWindowFromColumn,
    FocusColumn,
    SetColumnDisplay,
    SetWindowWidth,
    ConsumeWindowIntoColumn,
    FocusColumnFirst,
    Request,
    WindowsRequest,
    WorkspacesRequest,
    ActionRequest,
    Reply,
    Ok,
    Err,
    Handled,
    WindowsResponse,
    WorkspacesResponse,
    OtherResponse,
    encode_request,
    decode_request,
    encode_reply,
    decode_reply,
)

from .connection import NiriConnection

from .layout import (
    ColumnPlan,
    num_columns,
    windows_per_column,
    column_ranges,
    plan_columns,
    focused_workspace,
    windows_on_workspace,
)

from .arranger import ColumnArranger
from .config import ColumnsConfig
from .reporter import ConsoleReporter

from . import topics

__all__ = [
    # Version
    "__version__",
    # Errors
    "NcolError",
    "ConfigurationError",
    "TransportError",
    "ConnectError",
    "ProtocolError",
    "SemanticError",
    # Protocol types
    "ColumnDisplay",
    "SizeChange",
    "SizeChangeKind",
    "Window",
    "Workspace",
    "Action",
    "FocusWindow",
    "ExpelWindowFromColumn",
    "FocusColumn",
    "SetColumnDisplay",
    "SetWindowWidth",
    "ConsumeWindowIntoColumn",
    "FocusColumnFirst",
    "Request",
    "WindowsRequest",
    "WorkspacesRequest",
    "ActionRequest",
    "Reply",
    "Ok",
    "Err",
    "Handled",
    "WindowsResponse",
    "WorkspacesResponse",
    "OtherResponse",
    "encode_request",
    "decode_request",
    "encode_reply",
    "decode_reply",
    # Connection
    "NiriConnection",
    # Layout
    "ColumnPlan",
    "num_columns",
    "windows_per_column",
    "column_ranges",
    "plan_columns",
    "focused_workspace",
    "windows_on_workspace",
    # Arrangement
    "ColumnArranger",
    "ColumnsConfig",
    "ConsoleReporter",
    # Event topics
    "topics",
]
