"""
Tests for the blocking niri connection.
"""

import socket

import pytest
from ncol.connection import NiriConnection
from ncol.errors import ConnectError, ProtocolError, SemanticError, TransportError
from ncol.protocol import (
    ActionRequest,
    Err,
    FocusColumn,
    FocusColumnFirst,
    Handled,
    Ok,
    Window,
    WindowsRequest,
)


@pytest.mark.unit
class TestCall:
    """Test one request/reply exchange over a socket pair."""

    def test_call_writes_one_line_and_reads_one_reply(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":"Handled"}\n')

        reply = conn.call(ActionRequest(FocusColumnFirst()))

        assert reply == Ok(Handled())
        assert server.recv(4096) == b'{"Action":{"FocusColumnFirst":{}}}\n'

    def test_replies_are_read_one_line_at_a_time(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":"Handled"}\n{"Err":"no column 9"}\n')

        first = conn.action(FocusColumn(index=1))
        second = conn.action(FocusColumn(index=9))

        assert first == Ok(Handled())
        assert second == Err("no column 9")

    def test_peer_closes_mid_reply(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":')
        server.shutdown(socket.SHUT_WR)

        with pytest.raises(ProtocolError, match="closed"):
            conn.call(WindowsRequest())

        assert not conn.is_connected

    def test_peer_gone(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.close()

        with pytest.raises(ProtocolError):
            conn.call(WindowsRequest())

    def test_garbage_reply(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b"not json\n")

        with pytest.raises(ProtocolError, match="Invalid reply"):
            conn.call(WindowsRequest())

    def test_call_when_not_connected(self):
        with pytest.raises(TransportError, match="Not connected"):
            NiriConnection().call(WindowsRequest())

    def test_close_is_idempotent(self, socket_pair):
        client, _ = socket_pair
        conn = NiriConnection.from_socket(client)

        conn.close()
        conn.close()

        assert not conn.is_connected


@pytest.mark.unit
class TestQueries:
    """Test reply validation of the two queries."""

    def test_query_windows(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"Windows":[{"id":1,"workspace_id":2}]}}\n')

        windows = conn.query_windows()

        assert windows == [Window(id=1, workspace_id=2)]
        assert server.recv(4096) == b'"Windows"\n'

    def test_query_workspaces(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"Workspaces":[{"id":5,"is_focused":true}]}}\n')

        (workspace,) = conn.query_workspaces()

        assert workspace.id == 5
        assert workspace.is_focused

    def test_windows_query_answered_with_workspaces(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"Workspaces":[]}}\n')

        with pytest.raises(SemanticError, match="Expected Windows"):
            conn.query_windows()

    def test_workspaces_query_answered_with_handled(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":"Handled"}\n')

        with pytest.raises(SemanticError, match="Expected Workspaces"):
            conn.query_workspaces()

    def test_windows_query_answered_with_other_response(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"FocusedWindow":null}}\n')

        with pytest.raises(SemanticError, match="got FocusedWindow"):
            conn.query_windows()

    def test_workspaces_query_answered_with_outputs(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"Outputs":{}}}\n')

        with pytest.raises(SemanticError, match="got Outputs"):
            conn.query_workspaces()

    def test_windows_payload_not_a_list(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Ok":{"Windows":{}}}\n')

        with pytest.raises(ProtocolError, match="must be a list"):
            conn.query_windows()

    def test_query_refused(self, socket_pair):
        client, server = socket_pair
        conn = NiriConnection.from_socket(client)
        server.sendall(b'{"Err":"busy"}\n')

        with pytest.raises(SemanticError, match="busy"):
            conn.query_windows()


@pytest.mark.integration
class TestSocketPath:
    """Test connecting through a socket path."""

    def test_missing_socket(self, tmp_path):
        with pytest.raises(ConnectError, match="Failed to connect"):
            NiriConnection().connect(str(tmp_path / "missing.sock"))

    def test_connect_and_talk(self, niri_socket, fake_niri, make_windows):
        fake_niri.windows = make_windows(2)

        with NiriConnection().connect(niri_socket) as conn:
            assert conn.socket_path == niri_socket
            windows = conn.query_windows()
            reply = conn.action(FocusColumn(index=1))

        assert [w.id for w in windows] == [1, 2]
        assert reply.is_ok
        assert fake_niri.actions == [FocusColumn(index=1)]
        assert not conn.is_connected
