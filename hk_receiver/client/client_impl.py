# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver client.

Holds the zone registry and the connection, and builds requests from
templates.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import DEFAULT_TEMPLATE_ID
from ..exceptions import HkReceiverInvalidZoneError
from ..pkg_logging import logger
from ..protocol import generate_request

from .client_config import HkReceiverClientConfig
from .connection import HkReceiverConnection
from .zone import HkReceiverZone

class HkReceiverClient:
    """Harman Kardon receiver TCP/IP client."""

    config: HkReceiverClientConfig
    connection: HkReceiverConnection
    _zones: Dict[str, HkReceiverZone]
    """Registered zones by name; fixed once constructed."""

    def __init__(
            self,
            host: Optional[str]=None,
            port: Optional[int]=None,
            zones: Optional[Sequence[str]]=None,
            *,
            config: Optional[HkReceiverClientConfig]=None,
            connection: Optional[HkReceiverConnection]=None,
          ):
        """Initialize a Harman Kardon receiver client.

        Args:
            host:   The receiver host; see HkReceiverClientConfig.
            port:   The receiver port. Default 10025.
            zones:  The zone names to register. If None or empty, the
                    configured zones (by default 'Main Zone' and 'Zone 2')
                    are used. Later duplicates replace earlier ones.
            config: Base configuration.
            connection:
                    An existing connection to use instead of creating one.

        Connects immediately unless config.auto_connect is False.
        """
        self.config = HkReceiverClientConfig(
            default_host=host,
            default_port=port,
            zones=zones,
            base_config=config,
          )
        self._zones = {}
        for zone_name in self.config.zones:
            self._zones[zone_name] = HkReceiverZone(self, zone_name)
        if connection is None:
            connection = HkReceiverConnection(config=self.config)
        self.connection = connection
        if self.config.auto_connect:
            self.connection.ensure_connected()

    @property
    def zone_names(self) -> List[str]:
        """The registered zone names, in registration order."""
        return list(self._zones.keys())

    def zone(self, name: str) -> HkReceiverZone:
        """Returns the handle for a registered zone.

        Raises HkReceiverInvalidZoneError if the zone is not registered.
        """
        result = self._zones.get(name)
        if result is None:
            raise HkReceiverInvalidZoneError(name)
        return result

    def generate_request(
            self,
            action: str,
            zone: str,
            parameter: Optional[str]=None,
            template_id: str=DEFAULT_TEMPLATE_ID,
          ) -> str:
        """Builds a request body from a template in the configured template directory."""
        return generate_request(
            action,
            zone,
            parameter,
            template_id=template_id,
            template_dir=self.config.template_dir,
          )

    def send_request(self, data: str) -> None:
        """Sends a raw XML request to the receiver.

        Prefer HkReceiverZone.execute(), which builds the request from a
        template.
        """
        self.connection.send(data)

    def read_response(self) -> str:
        """Waits for the receiver's response and returns the XML document."""
        return self.connection.receive()

    def transact(self, data: str) -> str:
        """Sends a raw XML request and returns the response."""
        self.send_request(data)
        response = self.read_response()
        logger.debug(f"{self}: Received response: {response!r}")
        return response

    def close(self) -> None:
        """Closes the connection to the receiver."""
        self.connection.close()

    def __enter__(self) -> HkReceiverClient:
        logger.debug(f"{self}: Entering context manager")
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType],
          ) -> None:
        logger.debug(f"{self}: Exiting context manager, exc={exc_val}")
        self.close()

    def __str__(self) -> str:
        return f"HkReceiverClient({self.connection.host}:{self.connection.port})"

    def __repr__(self) -> str:
        return str(self)
