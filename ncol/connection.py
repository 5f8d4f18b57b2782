"""
niri Connection Module

Handles the blocking request/reply exchange over niri's Unix socket.
"""

from __future__ import annotations
import socket
from typing import BinaryIO, List, Optional

from .errors import ConnectError, ProtocolError, SemanticError, TransportError
from .protocol import (
    Action,
    ActionRequest,
    Err,
    Reply,
    Request,
    Window,
    WindowsRequest,
    WindowsResponse,
    Workspace,
    WorkspacesRequest,
    WorkspacesResponse,
    decode_reply,
    encode_request,
)


class NiriConnection:
    """Owns the socket to niri and performs one request/reply at a time.

    There is no pipelining: ``call`` writes a single line and blocks until
    the single reply line arrives. Any I/O failure closes the connection.
    """

    def __init__(self):
        self.socket: Optional[socket.socket] = None
        self.socket_path: Optional[str] = None
        self._reader: Optional[BinaryIO] = None

    @classmethod
    def from_socket(cls, sock: socket.socket) -> "NiriConnection":
        """Wrap an already connected stream socket."""
        conn = cls()
        conn._attach(sock)
        return conn

    def connect(self, socket_path: str) -> "NiriConnection":
        """Connect to the niri socket at ``socket_path``.

        Raises:
            ConnectError: if the socket is missing or refuses the connection
        """
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(socket_path)
        except OSError as e:
            sock.close()
            raise ConnectError(
                f"Failed to connect to niri at {socket_path}: {e}"
            ) from e
        self.socket_path = socket_path
        self._attach(sock)
        return self

    def _attach(self, sock: socket.socket):
        self.socket = sock
        self._reader = sock.makefile("rb")

    @property
    def is_connected(self) -> bool:
        return self.socket is not None

    def close(self):
        """Close the socket. Safe to call more than once."""
        if self._reader:
            self._reader.close()
            self._reader = None
        if self.socket:
            self.socket.close()
            self.socket = None

    def __enter__(self) -> "NiriConnection":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def call(self, request: Request) -> Reply:
        """Send one request and read its reply.

        Raises:
            TransportError: if the connection is not open
            ProtocolError: if encoding, writing, reading or decoding fails
        """
        if self.socket is None or self._reader is None:
            raise TransportError("Not connected to niri")

        try:
            line = encode_request(request)
        except (TypeError, ValueError) as e:
            raise ProtocolError(f"Cannot encode {request!r}: {e}") from e

        try:
            self.socket.sendall(line.encode("utf-8") + b"\n")
            raw = self._reader.readline()
        except OSError as e:
            self.close()
            raise ProtocolError(f"niri socket error: {e}") from e

        if not raw.endswith(b"\n"):
            self.close()
            raise ProtocolError("niri closed the socket before replying")

        try:
            return decode_reply(raw.decode("utf-8"))
        except ValueError as e:
            raise ProtocolError(f"Invalid reply from niri: {e}") from e

    def action(self, action: Action) -> Reply:
        """Run an action. The reply is returned as is, Err included."""
        return self.call(ActionRequest(action))

    def query_windows(self) -> List[Window]:
        """Get all windows, in the order niri reports them.

        Raises:
            SemanticError: if niri refuses or answers with another payload
        """
        reply = self.call(WindowsRequest())
        response = self._unwrap(reply, "Windows")
        if not isinstance(response, WindowsResponse):
            raise SemanticError(
                f"Expected Windows reply, got {response.tag}"
            )
        return response.windows

    def query_workspaces(self) -> List[Workspace]:
        """Get all workspaces.

        Raises:
            SemanticError: if niri refuses or answers with another payload
        """
        reply = self.call(WorkspacesRequest())
        response = self._unwrap(reply, "Workspaces")
        if not isinstance(response, WorkspacesResponse):
            raise SemanticError(
                f"Expected Workspaces reply, got {response.tag}"
            )
        return response.workspaces

    @staticmethod
    def _unwrap(reply: Reply, what: str):
        if isinstance(reply, Err):
            raise SemanticError(f"niri refused {what} request: {reply.message}")
        return reply.response
