# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver TCP/IP connection.

Owns the single socket to the receiver. The socket is opened lazily,
reopened when the receiver has closed it, and read by polling in
non-blocking mode: the receiver answers in bursts after an unpredictable
processing delay, and polling on a fixed cadence bounds the total wait
regardless of partial reads.

Requests carry no correlation id. Issuing a second request before the
response to the first has been read will mix up the responses; a reply
that arrives after a timeout is discarded by the next send().
"""

from __future__ import annotations

import time
import socket

from ..internal_types import *
from ..exceptions import (
    HkReceiverConnectionError,
    HkReceiverTimeoutError,
  )
from ..constants import POLL_INTERVAL, READ_CHUNK_SIZE
from ..pkg_logging import logger
from ..protocol import format_request_message, extract_xml_response

from .client_config import HkReceiverClientConfig
from .resolve_host import resolve_receiver_tcp_host

class HkReceiverConnection:
    """Harman Kardon receiver TCP/IP connection."""

    config: HkReceiverClientConfig
    host: str
    port: int

    sock: Optional[socket.socket] = None
    """The current socket, or None if not connected."""

    connect_count: int = 0
    """Number of successful connects made by this object."""

    def __init__(
            self,
            host: Optional[str]=None,
            port: Optional[int]=None,
            *,
            config: Optional[HkReceiverClientConfig]=None,
          ) -> None:
        """Initializes the connection. Does not connect."""
        self.config = HkReceiverClientConfig(
            default_host=host,
            default_port=port,
            base_config=config,
          )
        self.host, self.port = resolve_receiver_tcp_host(config=self.config)

    @property
    def timeout_secs(self) -> float:
        """Returns the timeout in seconds."""
        return self.config.timeout_secs

    @property
    def max_poll_attempts(self) -> int:
        """Number of read attempts made by receive() before giving up."""
        return max(1, int(self.timeout_secs / POLL_INTERVAL))

    def is_alive(self) -> bool:
        """Returns True if a socket is open and the receiver has not closed it."""
        sock = self.sock
        if sock is None:
            return False
        try:
            data = sock.recv(1, socket.MSG_PEEK)
        except BlockingIOError:
            # nothing buffered, but the connection is still open
            return True
        except OSError:
            logger.debug(f"{self}: Socket error while checking connection", exc_info=True)
            return False
        return len(data) > 0

    def reconnect(self) -> None:
        """Closes any existing socket and opens a new one, with timeout.

        Raises HkReceiverConnectionError if the connection cannot be made.
        """
        self.close()
        logger.debug(f"Connecting to receiver at {self.host}:{self.port} with timeout={self.timeout_secs}")
        try:
            sock = socket.create_connection((self.host, self.port), timeout=self.timeout_secs)
        except OSError as e:
            raise HkReceiverConnectionError(
                f"Unable to connect to receiver at {self.host}:{self.port}: {e}",
                errno=e.errno,
                strerror=e.strerror,
              ) from e
        sock.setblocking(False)
        self.sock = sock
        self.connect_count += 1
        logger.info(f"{self}: connected")

    def ensure_connected(self) -> None:
        """Connects if there is no socket, or if the receiver closed it."""
        if self.is_alive():
            return
        if self.sock is not None:
            logger.debug(f"{self}: Connection closed by receiver; reconnecting")
        self.reconnect()

    def _drain(self, sock: socket.socket) -> None:
        """Discards whatever the receiver sent that nobody read (best effort)."""
        try:
            stale = sock.recv(READ_CHUNK_SIZE)
        except BlockingIOError:
            return
        except OSError:
            logger.debug(f"{self}: Socket error while discarding stale data", exc_info=True)
            return
        if len(stale) > 0:
            logger.debug(f"{self}: Discarded {len(stale)} stale bytes")

    def send(self, payload: str) -> None:
        """Sends a request body to the receiver, (re)connecting first if necessary.

        Raises HkReceiverConnectionError if the connection cannot be made
        or the write fails.
        """
        self.ensure_connected()
        sock = self.sock
        assert sock is not None
        self._drain(sock)
        message = format_request_message(payload)
        logger.debug(f"{self}: Writing {len(message)} bytes")
        try:
            sock.sendall(message)
        except OSError as e:
            self.close()
            raise HkReceiverConnectionError(
                f"Unable to write request to receiver at {self.host}:{self.port}: {e}",
                errno=e.errno,
                strerror=e.strerror,
              ) from e

    def _read_available(self, sock: socket.socket) -> bytes:
        try:
            return sock.recv(READ_CHUNK_SIZE)
        except BlockingIOError:
            return b''
        except OSError as e:
            self.close()
            raise HkReceiverConnectionError(
                f"Connection to receiver at {self.host}:{self.port} failed while reading: {e}",
                errno=e.errno,
                strerror=e.strerror,
              ) from e

    def receive(self) -> str:
        """Polls for a response and returns it, starting at the first '<?xml'.

        Makes at most max_poll_attempts reads, POLL_INTERVAL seconds apart,
        and returns as soon as one of them yields data.

        Raises HkReceiverTimeoutError if nothing arrives in time, and
        HkReceiverResponseError if what arrives is not an XML document.
        """
        sock = self.sock
        if sock is None:
            raise HkReceiverConnectionError(f"Not connected to receiver at {self.host}:{self.port}")
        max_attempts = self.max_poll_attempts
        for attempt in range(max_attempts):
            data = self._read_available(sock)
            if len(data) > 0:
                break
            logger.debug(f"{self}: No response yet (attempt {attempt + 1}/{max_attempts})")
            time.sleep(POLL_INTERVAL)
        else:
            raise HkReceiverTimeoutError(
                f"Exceeded timeout of {self.timeout_secs} seconds while waiting for response.")
        logger.debug(f"{self}: Read {len(data)} bytes")
        return extract_xml_response(data)

    def close(self) -> None:
        """Closes the socket, if open. Safe to call more than once."""
        sock = self.sock
        self.sock = None
        if sock is not None:
            try:
                sock.close()
            except OSError:
                logger.debug(f"{self}: Exception while closing socket", exc_info=True)

    def __enter__(self) -> HkReceiverConnection:
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"HkReceiverConnection({self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
