# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver host IP/Port resolver.

Resolves host strings from arguments, environment variables or config files
into a receiver address and port.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import HkReceiverError

from .client_config import HkReceiverClientConfig

def resolve_receiver_tcp_host(
        host: Optional[str]=None,
        default_port: Optional[int]=None,
        config: Optional[HkReceiverClientConfig]=None,
      ) -> Tuple[str, int]:
    """Resolves a receiver host string into a TCP/IP hostname and port.

        Args:
            host: The hostname or IPV4 address of the receiver.
                    May optionally be prefixed with "tcp://".
                    May be suffixed with ":<port>" to specify a
                    non-default port, which will override the default_port argument.
                    If None, the default host in config is used.
            default_port: The default TCP/IP port number to use. If None, the port
                    will be taken from the config.

        Returns:
            A tuple of (hostname: str, port: int) where:
                hostname: The resolved IP address or DNS name.
                port:     The resolved port number.
    """
    config = HkReceiverClientConfig(
        default_host=host,
        default_port=default_port,
        base_config=config
    )
    host = config.default_host
    if host is None:
        raise HkReceiverError("No receiver host specified; pass a host or set HK_RECEIVER_HOST")
    port = config.default_port

    if host.startswith('tcp://') or not '/' in host:
        if host.startswith('tcp://'):
            host = host[6:]
        if ':' in host:
            host, port_str = host.rsplit(':', 1)
            try:
                port = int(port_str)
            except ValueError as e:
                raise HkReceiverError(f"Invalid port in receiver host specifier: '{port_str}'") from e
        if host == '':
            raise HkReceiverError("Empty receiver host name")
    else:
        raise HkReceiverError(f"Invalid host specifier for TCP transport: '{host}'")

    return (host, port)
