# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver emulator session.

One session per accepted TCP connection. Splits the incoming byte stream
into requests (pseudo-HTTP header block followed by Content-Length bytes of
XML) and hands each one to the emulator.
"""

from __future__ import annotations

import re
import asyncio
from enum import Enum

from ..internal_types import *
from ..pkg_logging import logger

if TYPE_CHECKING:
    from .emulator_impl import HkReceiverEmulator

CONTENT_LENGTH_RE = re.compile(rb'Content-Length:[ \t]*(\d+)\r\n', re.IGNORECASE)

MAX_PENDING_DATA = 65536
"""Sessions that buffer more than this without a complete request are dropped."""

class EmulatorSessionState(Enum):
    UNCONNECTED = 0
    READING_REQUEST = 1
    CLOSED = 2

class HkReceiverEmulatorSession(asyncio.Protocol):
    session_id: int = -1
    emulator: HkReceiverEmulator
    transport: Optional[asyncio.Transport] = None
    peer_name: str = "<unconnected>"
    description: str = "EmulatorSession(<unconnected>)"
    state: EmulatorSessionState = EmulatorSessionState.UNCONNECTED
    partial_data: bytes = b""

    def __init__(self, emulator: HkReceiverEmulator):
        self.emulator = emulator
        self.session_id = emulator.alloc_session_id(self)
        self.description = f"EmulatorSession(id={self.session_id}, from=<unconnected>)"

    def write(self, data: Union[bytes, bytearray, memoryview]) -> None:
        if self.transport is None or self.state == EmulatorSessionState.CLOSED:
            logger.debug(f"EmulatorSession: Attempt to write to closed session {self.description}; ignored")
            return
        self.transport.write(data)

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        assert isinstance(transport, asyncio.Transport)
        assert self.state == EmulatorSessionState.UNCONNECTED
        self.transport = transport
        self.peer_name = str(transport.get_extra_info('peername'))
        self.description = f"EmulatorSession(id={self.session_id}, from='{self.peer_name}')"
        logger.debug(f"EmulatorSession: Connection from {self.peer_name}")
        self.state = EmulatorSessionState.READING_REQUEST

    def close(self) -> None:
        if self.state != EmulatorSessionState.CLOSED:
            self.state = EmulatorSessionState.CLOSED
            if self.transport is not None:
                self.transport.close()
            self.emulator.free_session_id(self.session_id)

    def _next_request(self) -> Optional[bytes]:
        """Removes and returns the next complete request body, if one is buffered."""
        match = CONTENT_LENGTH_RE.search(self.partial_data)
        if match is None:
            return None
        content_length = int(match.group(1))
        body_start = match.end()
        body_end = body_start + content_length
        if len(self.partial_data) < body_end:
            return None
        body = self.partial_data[body_start:body_end]
        self.partial_data = self.partial_data[body_end:]
        return body

    def data_received(self, data: bytes) -> None:
        if self.state != EmulatorSessionState.READING_REQUEST:
            return
        try:
            self.partial_data += data
            while True:
                body = self._next_request()
                if body is None:
                    break
                self.emulator.on_request_received(self, body)
            if len(self.partial_data) > MAX_PENDING_DATA:
                logger.warning(f"{self}: {len(self.partial_data)} bytes buffered without a complete request; closing")
                self.close()
        except BaseException as e:
            logger.exception(f"{self}: Exception while processing data: {e}")
            self.close()
            raise

    def connection_lost(self, exc: Optional[BaseException]) -> None:
        logger.debug(f"{self}: Connection lost, exception={exc}; closing connection")
        self.close()

    def eof_received(self) -> bool:
        logger.debug(f"{self}: EOF received; closing connection")
        self.close()
        return True

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return str(self)
