# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package-wide logger for hk_receiver"""

from __future__ import annotations

import logging

logger = logging.getLogger('hk_receiver')
