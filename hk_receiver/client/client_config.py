# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver client configuration.

Provides a general config object for HkReceiverClient and
HkReceiverConnection.
"""

from __future__ import annotations

import os
import json

from ..internal_types import *
from ..exceptions import HkReceiverError
from ..constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_PORT,
    DEFAULT_ZONES,
    DEFAULT_TEMPLATE_DIR,
  )

def parse_zone_list(zones: Union[str, Iterable[str]]) -> List[str]:
    """Converts a comma-separated string or an iterable into a list of zone names.

    Blank entries are dropped; order is preserved.
    """
    if isinstance(zones, str):
        zones = zones.split(',')
    return [ zone.strip() for zone in zones if zone.strip() != '' ]

def parse_timeout(value: Union[str, int, float]) -> float:
    """Converts a timeout setting to seconds.

    Raises HkReceiverError unless the value is a positive number.
    """
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise HkReceiverError(f"Invalid timeout: {value!r}") from e
    if not result > 0:
        raise HkReceiverError(f"Timeout must be positive: {value}")
    return result

class HkReceiverClientConfig:
    """Harman Kardon receiver client configuration."""
    default_host: Optional[str]
    default_port: int
    timeout_secs: float
    zones: List[str]
    template_dir: str
    auto_connect: bool

    def __init__(
            self,
            default_host: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float]=None,
            zones: Optional[Iterable[str]]=None,
            template_dir: Optional[str]=None,
            auto_connect: Optional[bool]=None,
            base_config: Optional[HkReceiverClientConfig]=None,
            use_config_file: bool=True,
          ) -> None:
        """Creates a configuration for a Harman Kardon receiver client.

           Args:
             default_host: The hostname or IPV4 address of the receiver.
                   May optionally be prefixed with "tcp://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override default_port.
                   If None, the host will be taken from the
                   HK_RECEIVER_HOST environment variable.
             default_port: The TCP/IP port number to use.
                   If None, the port will be taken from HK_RECEIVER_PORT.
                   If that environment variable is not found, the
                   receiver's standard port (10025) will be used.
             timeout_secs:
                   Bound on connecting and on waiting for a response, in
                   seconds. If None, HK_RECEIVER_TIMEOUT or
                   DEFAULT_TIMEOUT is used.
             zones:
                   The zone names available on the receiver. If None or
                   empty, HK_RECEIVER_ZONES (comma-separated) or
                   DEFAULT_ZONES is used.
             template_dir:
                   Directory containing request templates. If None,
                   HK_RECEIVER_TEMPLATE_DIR or the templates shipped with
                   this package are used.
             auto_connect:
                   If True, the client connects as soon as it is
                   constructed. Otherwise it connects on the first request.
                   Default is True.
             base_config:
                   An optional base configuration to use in place of
                   the defaults.
             use_config_file:
                   If True and no base_config is given, the JSON file
                   named by HK_RECEIVER_CONFIG_FILE is applied over the
                   defaults.
        """
        if base_config is None:
            self.init_from_defaults(use_config_file=use_config_file)
        else:
            self.init_from_base_config(base_config)

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if default_port is not None and default_port > 0:
            self.default_port = int(default_port)

        if timeout_secs is not None:
            self.timeout_secs = parse_timeout(timeout_secs)

        if zones is not None:
            zone_list = list(zones)
            if len(zone_list) > 0:
                self.zones = zone_list

        if template_dir is not None and template_dir != '':
            self.template_dir = template_dir

        if auto_connect is not None:
            self.auto_connect = auto_connect

    def init_from_defaults(self, use_config_file: bool=True) -> None:
        """Initializes the configuration from defaults."""
        self.default_host = None
        self.default_port = DEFAULT_PORT
        self.timeout_secs = DEFAULT_TIMEOUT
        self.zones = list(DEFAULT_ZONES)
        self.template_dir = DEFAULT_TEMPLATE_DIR
        self.auto_connect = True

        if use_config_file:
            config_file = os.environ.get('HK_RECEIVER_CONFIG_FILE')
            if config_file is not None and config_file != '':
                with open(config_file, 'r') as f:
                    config_jsonable = json.load(f)
                self.update_from_jsonable(config_jsonable)

        default_host = os.environ.get('HK_RECEIVER_HOST')
        if default_host is not None and default_host != '':
            self.default_host = default_host
        default_port_str = os.environ.get('HK_RECEIVER_PORT')
        if default_port_str is not None and default_port_str != '':
            self.default_port = int(default_port_str)
        timeout_str = os.environ.get('HK_RECEIVER_TIMEOUT')
        if timeout_str is not None and timeout_str != '':
            self.timeout_secs = parse_timeout(timeout_str)
        zones_str = os.environ.get('HK_RECEIVER_ZONES')
        if zones_str is not None:
            zones = parse_zone_list(zones_str)
            if len(zones) > 0:
                self.zones = zones
        template_dir = os.environ.get('HK_RECEIVER_TEMPLATE_DIR')
        if template_dir is not None and template_dir != '':
            self.template_dir = template_dir

    def init_from_base_config(self, base_config: HkReceiverClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.timeout_secs = base_config.timeout_secs
        self.zones = list(base_config.zones)
        self.template_dir = base_config.template_dir
        self.auto_connect = base_config.auto_connect

    def to_jsonable(self) -> JsonableDict:
        """Returns a JSON-serializable representation of the configuration."""
        result: JsonableDict = dict(
            default_host=self.default_host,
            default_port=self.default_port,
            timeout_secs=self.timeout_secs,
            zones=list(self.zones),
            template_dir=self.template_dir,
            auto_connect=self.auto_connect,
          )
        return result

    def to_json(self) -> str:
        """Returns a JSON representation of the configuration."""
        return json.dumps(self.to_jsonable())

    def update_from_jsonable(self, jsonable: JsonableDict) -> None:
        """Updates the configuration from a JSON-serializable representation."""
        default_host = jsonable.get('default_host')
        if default_host is not None and default_host != '':
            self.default_host = str(default_host)
        default_port = jsonable.get('default_port')
        if default_port is not None and default_port != '':
            self.default_port = int(default_port)
        timeout_secs = jsonable.get('timeout_secs')
        if timeout_secs is not None and timeout_secs != '':
            self.timeout_secs = parse_timeout(timeout_secs)
        zones = jsonable.get('zones')
        if zones is not None and zones != '':
            zone_list = parse_zone_list(zones)
            if len(zone_list) > 0:
                self.zones = zone_list
        template_dir = jsonable.get('template_dir')
        if template_dir is not None and template_dir != '':
            self.template_dir = str(template_dir)
        auto_connect = jsonable.get('auto_connect')
        if auto_connect is not None and auto_connect != '':
            self.auto_connect = bool(auto_connect)

    @classmethod
    def from_jsonable(cls, jsonable: JsonableDict, use_config_file: bool=True) -> 'HkReceiverClientConfig':
        """Creates a configuration from a JSON-serializable representation."""
        result = cls(use_config_file=use_config_file)
        result.update_from_jsonable(jsonable)
        return result

    @classmethod
    def from_json(cls, json_str: str, use_config_file: bool=True) -> 'HkReceiverClientConfig':
        """Creates a configuration from a JSON representation."""
        jsonable = json.loads(json_str)
        return cls.from_jsonable(jsonable, use_config_file=use_config_file)

    @classmethod
    def from_config_file(cls, filename: str) -> 'HkReceiverClientConfig':
        """Creates a configuration from a JSON-serialized config file."""
        with open(filename, 'r') as f:
            jsonable: JsonableDict = json.load(f)

        result = cls.from_jsonable(jsonable, use_config_file=False)
        return result

    def __str__(self) -> str:
        return (
            f"HkReceiverConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
