import socket

import pytest

from hk_receiver.client import connection as connection_module


ENV_VARS = (
    "HK_RECEIVER_CONFIG_FILE",
    "HK_RECEIVER_HOST",
    "HK_RECEIVER_PORT",
    "HK_RECEIVER_TIMEOUT",
    "HK_RECEIVER_ZONES",
    "HK_RECEIVER_TEMPLATE_DIR",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's HK_RECEIVER_* settings out of the tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class FakeSocket:
    """Stands in for a connected non-blocking socket.

    ``reads`` is consumed one entry per recv(); ``None`` means no data is
    available yet (BlockingIOError), ``b""`` means the peer closed.
    Once ``reads`` is exhausted, recv() behaves as if no data is pending.
    Each sendall() moves the next entry of ``replies`` (a list of reads)
    onto ``reads``.
    """

    def __init__(self, reads=None):
        self.reads = list(reads or [])
        self.replies = []
        self.sent = []
        self.closed = False
        self.blocking = True
        self.eof = False
        self.recv_calls = 0

    def setblocking(self, flag):
        self.blocking = flag

    def _next(self, consume):
        if self.closed:
            raise OSError(9, "Bad file descriptor")
        if not self.reads:
            if self.eof:
                return b""
            raise BlockingIOError(11, "Resource temporarily unavailable")
        item = self.reads[0]
        if consume:
            self.reads.pop(0)
        if item is None:
            raise BlockingIOError(11, "Resource temporarily unavailable")
        return item

    def recv(self, bufsize, flags=0):
        if flags & socket.MSG_PEEK:
            if self.closed:
                raise OSError(9, "Bad file descriptor")
            if self.reads and self.reads[0] is not None:
                return self.reads[0][:1]
            if self.eof and not self.reads:
                return b""
            raise BlockingIOError(11, "Resource temporarily unavailable")
        self.recv_calls += 1
        return self._next(consume=True)

    def sendall(self, data):
        self.sent.append(bytes(data))
        if self.replies:
            self.reads.extend(self.replies.pop(0))

    def close(self):
        self.closed = True


class FakeConnector:
    """Replacement for socket.create_connection that hands out FakeSockets."""

    def __init__(self):
        self.calls = []
        self.sockets = []
        self.error = None

    def __call__(self, address, timeout=None):
        self.calls.append((address, timeout))
        if self.error is not None:
            raise self.error
        sock = FakeSocket()
        self.sockets.append(sock)
        return sock

    @property
    def last_socket(self):
        return self.sockets[-1]


@pytest.fixture
def fake_connector(monkeypatch):
    connector = FakeConnector()
    monkeypatch.setattr(connection_module.socket, "create_connection", connector)
    return connector


@pytest.fixture
def sleeps(monkeypatch):
    """Record poll sleeps instead of sleeping."""
    recorded = []
    monkeypatch.setattr(connection_module.time, "sleep", recorded.append)
    return recorded
