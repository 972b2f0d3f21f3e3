# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver client.

Provides a synchronous client for a Harman Kardon receiver on TCP/IP.
"""

from .client_config import HkReceiverClientConfig, parse_zone_list, parse_timeout
from .resolve_host import resolve_receiver_tcp_host
from .connection import HkReceiverConnection
from .zone import HkReceiverZone
from .client_impl import HkReceiverClient
