# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Harman Kardon receiver emulator.

Provides a simple emulation of a Harman Kardon receiver on TCP/IP.
"""

from .emulator_impl import (
    HkReceiverEmulator,
    EmulatorRequest,
  )
