# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver emulator.

Provides a simple emulation of a Harman Kardon receiver on TCP/IP.
"""

from __future__ import annotations

import asyncio
import xml.etree.ElementTree as ET

from ..internal_types import *
from ..pkg_logging import logger
from ..constants import DEFAULT_PORT, DEFAULT_ZONES
from ..exceptions import HkReceiverError

from .session import HkReceiverEmulatorSession

RESPONSE_HEADER = b"HTTP/1.1 200 OK\r\nContent-Type: text/xml\r\n\r\n"
"""Emulated framing in front of each response document. Clients discard
   everything before '<?xml'."""

class EmulatorRequest:
    """A request received by the emulator."""
    session_id: int
    action: Optional[str]
    zone: Optional[str]
    parameter: Optional[str]
    body: str

    def __init__(
            self,
            session_id: int,
            body: str,
            action: Optional[str]=None,
            zone: Optional[str]=None,
            parameter: Optional[str]=None,
          ):
        self.session_id = session_id
        self.body = body
        self.action = action
        self.zone = zone
        self.parameter = parameter

    def __str__(self) -> str:
        return f"EmulatorRequest(action={self.action!r}, zone={self.zone!r}, parameter={self.parameter!r})"

    def __repr__(self) -> str:
        return str(self)

def _element_text(root: ET.Element, path: str) -> Optional[str]:
    element = root.find(path)
    if element is None:
        return None
    return (element.text or '').strip()

class HkReceiverEmulator:
    bind_addr: str
    port: int
    bound_port: Optional[int] = None
    zones: List[str]
    response_delay: float
    sessions: Dict[int, HkReceiverEmulatorSession]
    next_session_id: int = 0
    requests: List[EmulatorRequest]
    server: Optional[asyncio.Server] = None
    final_result: Optional[asyncio.Future[None]] = None

    def __init__(
            self,
            bind_addr: Optional[str]=None,
            port: int=DEFAULT_PORT,
            zones: Optional[Iterable[str]]=None,
            response_delay: float=0.0,
          ):
        """Creates an emulator.

        Args:
            bind_addr: Local address to listen on. Default '0.0.0.0'.
            port:      TCP port to listen on. 0 picks a free port, which is
                       available as bound_port after start().
            zones:     Zone names the emulated receiver accepts. Default
                       DEFAULT_ZONES.
            response_delay:
                       Seconds to wait before answering each request.
        """
        self.bind_addr = '0.0.0.0' if bind_addr is None else bind_addr
        self.port = port
        self.zones = list(DEFAULT_ZONES) if zones is None else list(zones)
        self.response_delay = response_delay
        self.sessions = {}
        self.requests = []

    def alloc_session_id(self, session: HkReceiverEmulatorSession) -> int:
        result = self.next_session_id
        self.next_session_id += 1
        self.sessions[result] = session
        return result

    def free_session_id(self, session_id: int) -> None:
        self.sessions.pop(session_id, None)

    def parse_request(self, session: HkReceiverEmulatorSession, body: bytes) -> EmulatorRequest:
        text = body.decode('utf-8', errors='replace')
        request = EmulatorRequest(session.session_id, text)
        try:
            root = ET.fromstring(body)
        except ET.ParseError as e:
            logger.warning(f"{session}: Unparseable request body: {e}")
            return request
        request.action = _element_text(root, './/control/name')
        request.zone = _element_text(root, './/control/zone')
        request.parameter = _element_text(root, './/control/para')
        return request

    def handle_request(self, session: HkReceiverEmulatorSession, request: EmulatorRequest) -> str:
        """Handles a single request, and returns the response XML document."""
        if request.action is None or request.action == '':
            status = 'ERROR'
            message = 'Malformed request'
        elif request.zone not in self.zones:
            status = 'ERROR'
            message = f"Unknown zone: {request.zone}"
        else:
            status = 'OK'
            message = ''
        response = ET.Element('harman')
        avr = ET.SubElement(response, 'avr')
        common = ET.SubElement(avr, 'common')
        result = ET.SubElement(common, 'response')
        ET.SubElement(result, 'name').text = request.action or ''
        ET.SubElement(result, 'zone').text = request.zone or ''
        ET.SubElement(result, 'para').text = request.parameter or ''
        ET.SubElement(result, 'status').text = status
        if message != '':
            ET.SubElement(result, 'message').text = message
        return '<?xml version="1.0" encoding="UTF-8"?>' + ET.tostring(response, encoding='unicode')

    def on_request_received(self, session: HkReceiverEmulatorSession, body: bytes) -> None:
        """Called when a complete request is received from a session."""
        request = self.parse_request(session, body)
        logger.info(f"{session}: Received {request}")
        self.requests.append(request)
        try:
            response = self.handle_request(session, request)
        except Exception as e:
            logger.exception(f"{session}: {type(e).__qualname__} while handling {request}")
            session.close()
            return
        data = RESPONSE_HEADER + response.encode('utf-8')
        if self.response_delay > 0:
            asyncio.get_running_loop().call_later(self.response_delay, session.write, data)
        else:
            session.write(data)

    async def start(self) -> None:
        """Starts listening for connections."""
        if self.server is not None:
            raise HkReceiverError("Emulator already started")
        loop = asyncio.get_running_loop()
        self.final_result = loop.create_future()
        self.server = await loop.create_server(
            lambda: HkReceiverEmulatorSession(self),
            self.bind_addr,
            self.port,
          )
        self.bound_port = self.server.sockets[0].getsockname()[1]
        logger.info(f"Harman Kardon receiver emulator listening on {self.bind_addr}:{self.bound_port}")

    def close(self, exc: Optional[BaseException]=None) -> None:
        """Initiates shutdown. Must be called from the event loop thread."""
        if self.final_result is not None and not self.final_result.done():
            if exc is None:
                self.final_result.set_result(None)
            else:
                self.final_result.set_exception(exc)

    async def wait(self) -> None:
        """Waits until close() is called, then closes all sessions and the server.

        Raises the exception passed to close(), if any.
        """
        assert self.final_result is not None and self.server is not None
        try:
            await self.final_result
        finally:
            for session in list(self.sessions.values()):
                session.close()
            self.server.close()
            await self.server.wait_closed()
            logger.info("Harman Kardon receiver emulator stopped")

    async def run(self) -> None:
        """Runs the emulator until close() is called."""
        await self.start()
        await self.wait()

    async def __aenter__(self) -> HkReceiverEmulator:
        await self.start()
        return self

    async def __aexit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        self.close()
        await self.wait()

    def __str__(self) -> str:
        return f"HkReceiverEmulator({self.bind_addr}:{self.port if self.bound_port is None else self.bound_port})"

    def __repr__(self) -> str:
        return str(self)
