"""
Shared pytest fixtures for ncol tests.
"""

import os
import shutil
import socket
import tempfile
import threading

import pytest
from pubsub import pub

from ncol.protocol import (
    ActionRequest,
    Err,
    Handled,
    Ok,
    Window,
    WindowsRequest,
    WindowsResponse,
    Workspace,
    WorkspacesRequest,
    WorkspacesResponse,
    decode_request,
    encode_reply,
)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a niri peer")
    config.addinivalue_line("markers", "integration: tests talking over a socket")


class FakeNiri:
    """In-memory niri peer.

    Answers queries from its window and workspace lists and acknowledges
    every action, except the ones named in ``reject`` which get an Err.
    """

    def __init__(self, windows=(), workspaces=(), reject=()):
        self.windows = list(windows)
        self.workspaces = list(workspaces)
        self.reject = set(reject)
        self.requests = []

    @property
    def actions(self):
        return [r.action for r in self.requests if isinstance(r, ActionRequest)]

    def reply_for(self, request):
        self.requests.append(request)
        if isinstance(request, WindowsRequest):
            return Ok(WindowsResponse(self.windows))
        if isinstance(request, WorkspacesRequest):
            return Ok(WorkspacesResponse(self.workspaces))
        if request.action.name in self.reject:
            return Err(f"{request.action.name} failed")
        return Ok(Handled())

    # Same surface as NiriConnection, without a socket

    def query_windows(self):
        return self.reply_for(WindowsRequest()).response.windows

    def query_workspaces(self):
        return self.reply_for(WorkspacesRequest()).response.workspaces

    def action(self, action):
        return self.reply_for(ActionRequest(action))

    def serve(self, sock: socket.socket):
        """Answer newline-delimited requests on ``sock`` until the peer hangs up."""
        with sock, sock.makefile("rb") as reader:
            for raw in reader:
                request = decode_request(raw.decode("utf-8"))
                line = encode_reply(self.reply_for(request))
                sock.sendall(line.encode("utf-8") + b"\n")


@pytest.fixture
def make_windows():
    """Factory fixture: ``count`` windows on workspace ``workspace_id``."""

    def factory(count, workspace_id=1, first_id=1):
        return [
            Window(id=first_id + i, workspace_id=workspace_id, title=f"window {i}")
            for i in range(count)
        ]

    return factory


@pytest.fixture
def workspaces():
    """Two workspaces, the first one focused."""
    return [
        Workspace(id=1, idx=1, output="DP-1", is_active=True, is_focused=True),
        Workspace(id=2, idx=2, output="DP-1"),
    ]


@pytest.fixture
def fake_niri(workspaces):
    return FakeNiri(workspaces=workspaces)


@pytest.fixture
def socket_pair():
    """Connected (client, server) stream sockets."""
    client, server = socket.socketpair(socket.AF_UNIX, socket.SOCK_STREAM)
    yield client, server
    client.close()
    server.close()


@pytest.fixture
def niri_socket(fake_niri):
    """Serve ``fake_niri`` on a Unix socket path and yield the path."""
    # Short directory: Unix socket paths are limited to ~108 bytes
    directory = tempfile.mkdtemp(prefix="ncol")
    path = os.path.join(directory, "niri.sock")
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(path)
    server.listen(1)
    server.settimeout(5)

    def accept_one():
        try:
            client, _ = server.accept()
        except OSError:
            # Test never connected
            return
        fake_niri.serve(client)

    thread = threading.Thread(target=accept_one, daemon=True)
    thread.start()

    yield path

    server.close()
    thread.join(timeout=1)
    shutil.rmtree(directory, ignore_errors=True)


@pytest.fixture
def events():
    """Record every (topic, kwargs) published on the bus during a test."""
    recorded = []

    def listener(topic=pub.AUTO_TOPIC, **kwargs):
        recorded.append((topic.getName(), kwargs))

    pub.subscribe(listener, pub.ALL_TOPICS)
    yield recorded
    pub.unsubscribe(listener, pub.ALL_TOPICS)
