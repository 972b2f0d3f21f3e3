# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Protocol-specific constants
"""

from __future__ import annotations

XML_MARKER = '<?xml'
"""Every response document starts at the first occurrence of this marker."""

REQUEST_VERB_LINE = 'POST AVR HTTP/1.1'
"""Request line of the pseudo-HTTP header sent in front of every request."""

REQUEST_HOST = '10.21.219.218:10025'
"""Value of the Host header. The receiver ignores it, and it is not derived
   from the address actually connected to."""

REQUEST_USER_AGENT = 'Harman Kardon AVR Remote Controller /2.0'
"""Value of the User-Agent header expected by the receiver."""

NAME_PLACEHOLDER = '{{ name }}'
"""Template token replaced by the action name."""

ZONE_PLACEHOLDER = '{{ zone }}'
"""Template token replaced by the zone name."""

PARA_PLACEHOLDER = '{{ para }}'
"""Template token replaced by the action parameter."""
