#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from typing import Optional

class HkReceiverError(Exception):
  """Base class for all error exceptions defined by this package."""
  pass

class HkReceiverConnectionError(HkReceiverError):
  """The TCP connection to the receiver could not be opened."""
  errno: Optional[int]
  strerror: Optional[str]

  def __init__(self, msg: str, errno: Optional[int]=None, strerror: Optional[str]=None):
    super().__init__(msg)
    self.errno = errno
    self.strerror = strerror

class HkReceiverTimeoutError(HkReceiverError):
  """No response arrived from the receiver within the timeout."""
  pass

class HkReceiverInvalidZoneError(HkReceiverError):
  """A zone name was requested that is not registered with the client."""
  zone_name: str

  def __init__(self, zone_name: str):
    super().__init__(f"Zone could not be found: {zone_name}")
    self.zone_name = zone_name

class HkReceiverTemplateNotFoundError(HkReceiverError):
  """A request template could not be loaded."""
  template_id: str

  def __init__(self, template_id: str, filename: str):
    super().__init__(f"Request template '{template_id}' could not be read from {filename}")
    self.template_id = template_id

class HkReceiverResponseError(HkReceiverError):
  """The receiver returned data that does not contain an XML document."""
  pass
