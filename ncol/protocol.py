"""
niri IPC Protocol Types for Python

This module models the subset of niri's JSON socket protocol that ncol
speaks: the Windows/Workspaces queries, the column actions and the
Ok/Err reply envelope. Every message is one compact JSON record per line.

Wire shapes:
    "Windows"                                   request, no arguments
    {"Action": {"FocusColumn": {"index": 1}}}   request carrying an action
    {"Ok": {"Windows": [...]}}                  successful query reply
    {"Ok": "Handled"}                           successful action reply
    {"Err": "message"}                          failure reply
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
import json
from typing import Any, Dict, List, Optional, Tuple, Type


class ColumnDisplay(Enum):
    """How the windows of a column are displayed."""

    NORMAL = "Normal"
    TABBED = "Tabbed"


class SizeChangeKind(Enum):
    """Size change variants."""

    SET_FIXED = "SetFixed"
    SET_PROPORTION = "SetProportion"
    ADJUST_FIXED = "AdjustFixed"
    ADJUST_PROPORTION = "AdjustProportion"


_FIXED_KINDS = (SizeChangeKind.SET_FIXED, SizeChangeKind.ADJUST_FIXED)


def _single_entry(data: Any, what: str) -> Tuple[str, Any]:
    """Unwrap a one-key tagged record like {"Tag": payload}."""
    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"{what} must be a single-key object, got {data!r}")
    ((tag, payload),) = data.items()
    return tag, payload


@dataclass(frozen=True)
class SizeChange:
    """A window or column size change.

    Fixed kinds carry logical pixels, proportion kinds carry a percentage
    of the available space.
    """

    kind: SizeChangeKind
    value: float

    @classmethod
    def set_proportion(cls, percent: float) -> "SizeChange":
        return cls(SizeChangeKind.SET_PROPORTION, float(percent))

    @classmethod
    def set_fixed(cls, pixels: int) -> "SizeChange":
        return cls(SizeChangeKind.SET_FIXED, int(pixels))

    def to_json(self) -> Dict[str, Any]:
        return {self.kind.value: self.value}

    @classmethod
    def from_json(cls, data: Any) -> "SizeChange":
        tag, value = _single_entry(data, "SizeChange")
        kind = SizeChangeKind(tag)
        if kind in _FIXED_KINDS:
            return cls(kind, int(value))
        return cls(kind, float(value))


@dataclass
class Window:
    """A window as reported by niri.

    Only ``id`` and ``workspace_id`` drive the layout; the rest is kept
    for progress output.
    """

    id: int
    workspace_id: Optional[int] = None
    title: Optional[str] = None
    app_id: Optional[str] = None
    pid: Optional[int] = None
    is_focused: bool = False
    is_floating: bool = False

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Window":
        if not isinstance(data, dict) or "id" not in data:
            raise ValueError(f"Window record without id: {data!r}")
        workspace_id = data.get("workspace_id")
        return cls(
            id=int(data["id"]),
            workspace_id=int(workspace_id) if workspace_id is not None else None,
            title=data.get("title"),
            app_id=data.get("app_id"),
            pid=data.get("pid"),
            is_focused=bool(data.get("is_focused", False)),
            is_floating=bool(data.get("is_floating", False)),
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Workspace:
    """A workspace as reported by niri."""

    id: int
    idx: Optional[int] = None
    name: Optional[str] = None
    output: Optional[str] = None
    is_active: bool = False
    is_focused: bool = False
    active_window_id: Optional[int] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Workspace":
        if not isinstance(data, dict) or "id" not in data:
            raise ValueError(f"Workspace record without id: {data!r}")
        return cls(
            id=int(data["id"]),
            idx=data.get("idx"),
            name=data.get("name"),
            output=data.get("output"),
            is_active=bool(data.get("is_active", False)),
            is_focused=bool(data.get("is_focused", False)),
            active_window_id=data.get("active_window_id"),
        )

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)


# Actions


class Action:
    """Base class for niri actions.

    The wire tag is the class name; subclasses with arguments override
    ``fields`` and ``from_fields``.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    def fields(self) -> Dict[str, Any]:
        return {}

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "Action":
        return cls()

    def to_json(self) -> Dict[str, Any]:
        return {self.name: self.fields()}


@dataclass(frozen=True)
class FocusWindow(Action):
    id: int

    def fields(self) -> Dict[str, Any]:
        return {"id": self.id}

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "FocusWindow":
        return cls(id=int(fields["id"]))


@dataclass(frozen=True)
class ExpelWindowFromColumn(Action):
    pass


@dataclass(frozen=True)
class FocusColumn(Action):
    """Focus a column by its 1-based index."""

    index: int

    def fields(self) -> Dict[str, Any]:
        return {"index": self.index}

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "FocusColumn":
        return cls(index=int(fields["index"]))


@dataclass(frozen=True)
class SetColumnDisplay(Action):
    display: ColumnDisplay

    def fields(self) -> Dict[str, Any]:
        return {"display": self.display.value}

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "SetColumnDisplay":
        return cls(display=ColumnDisplay(fields["display"]))


@dataclass(frozen=True)
class SetWindowWidth(Action):
    """Resize a window; ``id=None`` targets the focused one."""

    change: SizeChange
    id: Optional[int] = None

    def fields(self) -> Dict[str, Any]:
        return {"id": self.id, "change": self.change.to_json()}

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "SetWindowWidth":
        window_id = fields.get("id")
        return cls(
            change=SizeChange.from_json(fields["change"]),
            id=int(window_id) if window_id is not None else None,
        )


@dataclass(frozen=True)
class ConsumeWindowIntoColumn(Action):
    pass


@dataclass(frozen=True)
class FocusColumnFirst(Action):
    pass


ACTIONS: Dict[str, Type[Action]] = {
    cls.__name__: cls
    for cls in (
        FocusWindow,
        ExpelWindowFromColumn,
        FocusColumn,
        SetColumnDisplay,
        SetWindowWidth,
        ConsumeWindowIntoColumn,
        FocusColumnFirst,
    )
}


def action_from_json(data: Any) -> Action:
    tag, fields = _single_entry(data, "Action")
    if tag not in ACTIONS:
        raise ValueError(f"Unknown action: {tag}")
    if not isinstance(fields, dict):
        raise ValueError(f"Action {tag} fields must be an object, got {fields!r}")
    return ACTIONS[tag].from_fields(fields)


# Requests


class Request:
    """Base class for requests sent to niri."""

    def to_json(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class WindowsRequest(Request):
    def to_json(self) -> Any:
        return "Windows"


@dataclass(frozen=True)
class WorkspacesRequest(Request):
    def to_json(self) -> Any:
        return "Workspaces"


@dataclass(frozen=True)
class ActionRequest(Request):
    action: Action

    def to_json(self) -> Any:
        return {"Action": self.action.to_json()}


def request_from_json(data: Any) -> Request:
    if data == "Windows":
        return WindowsRequest()
    if data == "Workspaces":
        return WorkspacesRequest()
    tag, payload = _single_entry(data, "Request")
    if tag != "Action":
        raise ValueError(f"Unknown request: {tag}")
    return ActionRequest(action_from_json(payload))


# Replies


class Response:
    """Base class for the payload of a successful reply."""

    tag = ""

    def to_json(self) -> Any:
        raise NotImplementedError


@dataclass(frozen=True)
class Handled(Response):
    """Acknowledgement of an action."""

    tag = "Handled"

    def to_json(self) -> Any:
        return "Handled"


@dataclass
class WindowsResponse(Response):
    windows: List[Window] = field(default_factory=list)

    tag = "Windows"

    def to_json(self) -> Any:
        return {"Windows": [w.to_json() for w in self.windows]}


@dataclass
class WorkspacesResponse(Response):
    workspaces: List[Workspace] = field(default_factory=list)

    tag = "Workspaces"

    def to_json(self) -> Any:
        return {"Workspaces": [ws.to_json() for ws in self.workspaces]}


@dataclass
class OtherResponse(Response):
    """Any other well-formed niri response (FocusedWindow, Version, ...).

    ncol never asks for these; the payload is kept undecoded so a query
    answered with one can be reported by name.
    """

    tag: str
    payload: Any = None

    def to_json(self) -> Any:
        if self.payload is None:
            return self.tag
        return {self.tag: self.payload}


def response_from_json(data: Any) -> Response:
    if data == "Handled":
        return Handled()
    if isinstance(data, str):
        return OtherResponse(data)
    tag, payload = _single_entry(data, "Response")
    if tag not in ("Windows", "Workspaces"):
        return OtherResponse(tag, payload)
    if not isinstance(payload, list):
        raise ValueError(f"{tag} payload must be a list, got {payload!r}")
    if tag == "Windows":
        return WindowsResponse([Window.from_json(item) for item in payload])
    return WorkspacesResponse([Workspace.from_json(item) for item in payload])


class Reply:
    """Result of one request: either Ok or Err."""

    is_ok = False

    def to_json(self) -> Any:
        raise NotImplementedError


@dataclass
class Ok(Reply):
    response: Response

    is_ok = True

    def to_json(self) -> Any:
        return {"Ok": self.response.to_json()}


@dataclass
class Err(Reply):
    message: str

    def to_json(self) -> Any:
        return {"Err": self.message}


def reply_from_json(data: Any) -> Reply:
    tag, payload = _single_entry(data, "Reply")
    if tag == "Ok":
        return Ok(response_from_json(payload))
    if tag == "Err":
        return Err(str(payload))
    raise ValueError(f"Unknown reply: {tag}")


# Line codec


def _dumps(data: Any) -> str:
    # Compact form; json escapes control characters so the record has no raw newline
    return json.dumps(data, separators=(",", ":"), allow_nan=False)


def _loads(line: str, parse):
    try:
        return parse(json.loads(line))
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed record {line.strip()!r}: {e}") from e


def encode_request(request: Request) -> str:
    """Encode a request as one JSON line (without the terminator)."""
    return _dumps(request.to_json())


def decode_request(line: str) -> Request:
    return _loads(line, request_from_json)


def encode_reply(reply: Reply) -> str:
    return _dumps(reply.to_json())


def decode_reply(line: str) -> Reply:
    """Decode one reply line.

    Raises:
        ValueError: if the line is not a well-formed reply
    """
    return _loads(line, reply_from_json)
