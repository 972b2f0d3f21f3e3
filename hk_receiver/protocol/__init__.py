# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for Harman Kardon receivers.

This module defines the request framing, response extraction and request
templating used by Harman Kardon AV receivers for TCP/IP control.
It does not contain socket handling.
"""

from .constants import (
    XML_MARKER,
    REQUEST_VERB_LINE,
    REQUEST_HOST,
    REQUEST_USER_AGENT,
    NAME_PLACEHOLDER,
    ZONE_PLACEHOLDER,
    PARA_PLACEHOLDER,
  )

from .message import format_request_message, extract_xml_response

from .templates import (
    template_filename,
    load_template,
    render_template,
    generate_request,
  )
