# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package hk_receiver provides an API for controlling Harman Kardon
AV receivers via their XML-over-TCP/IP remote control protocol.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict

from .exceptions import (
    HkReceiverError,
    HkReceiverConnectionError,
    HkReceiverTimeoutError,
    HkReceiverInvalidZoneError,
    HkReceiverTemplateNotFoundError,
    HkReceiverResponseError,
  )

from .constants import (
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    POLL_INTERVAL,
    READ_CHUNK_SIZE,
    DEFAULT_ZONES,
    DEFAULT_TEMPLATE_ID,
    DEFAULT_TEMPLATE_DIR,
  )

from .client import (
    HkReceiverClient,
    HkReceiverClientConfig,
    HkReceiverConnection,
    HkReceiverZone,
    resolve_receiver_tcp_host,
  )

from .protocol import (
    format_request_message,
    extract_xml_response,
    generate_request,
    render_template,
    load_template,
  )
