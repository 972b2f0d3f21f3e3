import errno

import pytest

from hk_receiver import (
    HkReceiverClientConfig,
    HkReceiverConnection,
    HkReceiverConnectionError,
    HkReceiverError,
    HkReceiverResponseError,
    HkReceiverTimeoutError,
    format_request_message,
)


@pytest.fixture
def connection(fake_connector):
    return HkReceiverConnection("192.168.1.20")


def test_construction_does_not_connect(fake_connector):
    connection = HkReceiverConnection("192.168.1.20", 10026)

    assert connection.sock is None
    assert fake_connector.calls == []
    assert (connection.host, connection.port) == ("192.168.1.20", 10026)


def test_connect_uses_timeout_and_goes_non_blocking(connection, fake_connector):
    connection.ensure_connected()

    assert fake_connector.calls == [(("192.168.1.20", 10025), 2.0)]
    assert fake_connector.last_socket.blocking is False
    assert connection.is_alive()


def test_ensure_connected_twice_connects_once(connection, fake_connector):
    connection.ensure_connected()
    connection.ensure_connected()

    assert len(fake_connector.calls) == 1
    assert connection.connect_count == 1


def test_ensure_connected_replaces_socket_at_end_of_stream(connection, fake_connector):
    connection.ensure_connected()
    first = fake_connector.last_socket
    first.eof = True

    assert not connection.is_alive()
    connection.ensure_connected()

    assert len(fake_connector.calls) == 2
    assert first.closed
    assert connection.sock is fake_connector.last_socket


def test_reconnect_always_opens_new_socket(connection, fake_connector):
    connection.ensure_connected()
    connection.reconnect()

    assert len(fake_connector.calls) == 2
    assert fake_connector.sockets[0].closed


def test_connect_failure_carries_os_error(connection, fake_connector):
    fake_connector.error = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")

    with pytest.raises(HkReceiverConnectionError) as exc_info:
        connection.ensure_connected()

    assert exc_info.value.errno == errno.ECONNREFUSED
    assert exc_info.value.strerror == "Connection refused"
    assert connection.sock is None


def test_send_drains_stale_data_then_writes_message(connection, fake_connector):
    connection.ensure_connected()
    sock = fake_connector.last_socket
    sock.reads.append(b"<?xml stale reply?>")

    connection.send("<r>PowerOn</r>")

    assert sock.reads == []
    assert sock.sent == [format_request_message("<r>PowerOn</r>")]


def test_send_connects_first(connection, fake_connector):
    connection.send("<r/>")

    assert len(fake_connector.calls) == 1
    assert fake_connector.last_socket.sent == [format_request_message("<r/>")]


def test_send_reopens_dropped_connection(connection, fake_connector):
    connection.ensure_connected()
    dropped = fake_connector.last_socket
    dropped.eof = True

    connection.send("<r/>")

    assert dropped.sent == []
    assert dropped.closed
    assert fake_connector.last_socket.sent == [format_request_message("<r/>")]


def test_send_write_failure_closes_socket(connection, fake_connector):
    connection.ensure_connected()
    sock = fake_connector.last_socket

    def broken_sendall(data):
        raise BrokenPipeError(errno.EPIPE, "Broken pipe")

    sock.sendall = broken_sendall

    with pytest.raises(HkReceiverConnectionError) as exc_info:
        connection.send("<r/>")

    assert exc_info.value.errno == errno.EPIPE
    assert connection.sock is None


def test_receive_polls_until_data(connection, fake_connector, sleeps):
    connection.ensure_connected()
    fake_connector.last_socket.reads.extend(
        [None, None, None, b'garbage<?xml version="1.0"?><ok/>tail'])

    response = connection.receive()

    assert response == '<?xml version="1.0"?><ok/>tail'
    assert sleeps == [0.5, 0.5, 0.5]


def test_receive_times_out_after_two_attempts_per_second(connection, fake_connector, sleeps):
    connection.ensure_connected()
    sock = fake_connector.last_socket

    with pytest.raises(HkReceiverTimeoutError):
        connection.receive()

    assert sock.recv_calls == 4
    assert sum(sleeps) == pytest.approx(2.0)


def test_receive_attempts_follow_configured_timeout(fake_connector, sleeps):
    connection = HkReceiverConnection(config=HkReceiverClientConfig("avr", timeout_secs=5))
    connection.ensure_connected()

    with pytest.raises(HkReceiverTimeoutError):
        connection.receive()

    assert fake_connector.last_socket.recv_calls == 10
    assert connection.max_poll_attempts == 10


def test_receive_without_marker_is_malformed(connection, fake_connector, sleeps):
    connection.ensure_connected()
    fake_connector.last_socket.reads.append(b"HTTP/1.1 200 OK\r\n\r\n")

    with pytest.raises(HkReceiverResponseError):
        connection.receive()


def test_receive_requires_connection(connection):
    with pytest.raises(HkReceiverConnectionError):
        connection.receive()


def test_late_reply_is_discarded_by_next_send(connection, fake_connector, sleeps):
    connection.ensure_connected()
    sock = fake_connector.last_socket
    with pytest.raises(HkReceiverTimeoutError):
        connection.receive()
    # the reply to the first request shows up after the timeout
    sock.reads.append(b"<?xml first?>")
    sock.replies.append([b"<?xml second?>"])

    connection.send("<r>second</r>")

    assert connection.receive() == "<?xml second?>"


def test_close_is_idempotent(connection, fake_connector):
    connection.ensure_connected()
    sock = fake_connector.last_socket

    connection.close()
    connection.close()

    assert sock.closed
    assert connection.sock is None
    assert not connection.is_alive()


def test_context_manager_closes(fake_connector):
    with HkReceiverConnection("avr") as connection:
        connection.ensure_connected()
        sock = fake_connector.last_socket

    assert sock.closed


@pytest.mark.parametrize(
    "timeout, attempts",
    [(0.5, 1), (1.0, 2), (1.25, 2), (1.75, 3), (2.25, 4), (2.5, 5), (0.25, 1)],
)
def test_poll_attempts_are_two_per_whole_second(fake_connector, sleeps, timeout, attempts):
    connection = HkReceiverConnection(config=HkReceiverClientConfig("avr", timeout_secs=timeout))
    connection.ensure_connected()

    with pytest.raises(HkReceiverTimeoutError):
        connection.receive()

    assert connection.max_poll_attempts == attempts
    assert fake_connector.last_socket.recv_calls == attempts
    assert sleeps == [0.5] * attempts


def test_bad_timeout_from_environment_never_reaches_socket(monkeypatch, fake_connector):
    monkeypatch.setenv("HK_RECEIVER_TIMEOUT", "-1")

    with pytest.raises(HkReceiverError):
        HkReceiverConnection("127.0.0.1", 1).ensure_connected()

    assert fake_connector.calls == []
