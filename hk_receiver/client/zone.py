# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver zone handle.

A zone ("Main Zone", "Zone 2", ...) is an output area of the receiver that
accepts commands independently of the others.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import DEFAULT_TEMPLATE_ID

if TYPE_CHECKING:
    from .client_impl import HkReceiverClient

class HkReceiverZone:
    """Issues commands to a single receiver zone through its client."""

    client: HkReceiverClient
    name: str

    def __init__(self, client: HkReceiverClient, name: str):
        self.client = client
        self.name = name

    def request(
            self,
            action: str,
            parameter: Optional[str]=None,
            template_id: str=DEFAULT_TEMPLATE_ID,
          ) -> str:
        """Builds the request body for an action on this zone."""
        return self.client.generate_request(action, self.name, parameter, template_id)

    def execute(
            self,
            action: str,
            parameter: Optional[str]=None,
            template_id: str=DEFAULT_TEMPLATE_ID,
          ) -> str:
        """Sends an action to this zone and returns the receiver's XML response."""
        return self.client.transact(self.request(action, parameter, template_id))

    def __str__(self) -> str:
        return f"HkReceiverZone({self.name!r})"

    def __repr__(self) -> str:
        return str(self)
