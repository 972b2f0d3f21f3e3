# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by hk_receiver"""

from __future__ import annotations

import os

DEFAULT_PORT = 10025
"""The listen port number used by the receiver for TCP/IP control."""

DEFAULT_TIMEOUT = 2.0
"""The default timeout for connecting and for waiting on a response, in seconds."""

POLL_INTERVAL = 0.5
"""Seconds between read attempts while waiting for a response."""

READ_CHUNK_SIZE = 4096
"""Maximum number of bytes read from the socket in a single attempt."""

DEFAULT_ZONES = ('Main Zone', 'Zone 2')
"""Zones registered when the caller does not supply any (AVR 370 layout)."""

DEFAULT_TEMPLATE_ID = 'hk'
"""Name of the request template used when none is given."""

DEFAULT_TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')
"""Directory holding the request templates shipped with the package."""
