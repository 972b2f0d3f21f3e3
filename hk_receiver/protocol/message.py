# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Wire formatting for Harman Kardon receivers.

Requests are framed by a pseudo-HTTP header that is immediately followed by
the XML body (there is no blank line between them). Responses are whatever
arrives on the socket; the XML document is cut out of it at the first
'<?xml' marker.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import HkReceiverResponseError
from .constants import (
    XML_MARKER,
    REQUEST_VERB_LINE,
    REQUEST_HOST,
    REQUEST_USER_AGENT,
  )

def format_request_message(payload: str) -> bytes:
    """Frames a request body for transmission to the receiver.

    Content-Length is the UTF-8 encoded length of the payload.
    """
    body = payload.encode('utf-8')
    header = (
        f"\r\n{REQUEST_VERB_LINE}\r\n"
        f"Host: {REQUEST_HOST}\r\n"
        f"User-Agent: {REQUEST_USER_AGENT}\r\n"
        f"Content-Length: {len(body)}\r\n"
      )
    return header.encode('utf-8') + body

def extract_xml_response(data: Union[bytes, str]) -> str:
    """Returns the response text starting at the first '<?xml' marker.

    Raises HkReceiverResponseError if the marker is not present.
    """
    if isinstance(data, bytes):
        text = data.decode('utf-8', errors='replace')
    else:
        text = data
    i_marker = text.find(XML_MARKER)
    if i_marker < 0:
        raise HkReceiverResponseError(f"Response from receiver does not contain an XML document: {text!r}")
    return text[i_marker:]
