#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Runs a Harman Kardon receiver emulator for testing purposes.

Settings not given on the command line are taken from HK_RECEIVER_EMULATOR_*
environment variables, which may be set in a .env file.
"""

from __future__ import annotations

import os
import sys
import asyncio
import logging
import argparse
from signal import SIGINT, SIGTERM

from dotenv import load_dotenv

from ..internal_types import *
from ..constants import DEFAULT_PORT
from ..client import parse_zone_list
from .emulator_impl import HkReceiverEmulator

async def arun_emulator(args: argparse.Namespace) -> int:
    zones: Optional[List[str]] = None
    if args.zones is not None:
        zones = parse_zone_list(args.zones)
    emulator = HkReceiverEmulator(
        bind_addr=args.bind,
        port=args.port,
        zones=zones,
        response_delay=args.delay,
      )
    def sigint_cleanup() -> None:
        emulator.close()
    loop = asyncio.get_running_loop()
    for signal in (SIGINT, SIGTERM):
        loop.add_signal_handler(signal, sigint_cleanup)
    try:
        await emulator.run()
    finally:
        for signal in (SIGINT, SIGTERM):
            loop.remove_signal_handler(signal)
    return 0

def run(argv: Optional[Sequence[str]]=None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Run a Harman Kardon receiver emulator for testing purposes.")
    parser.add_argument('--log-level', dest='log_level',
                        default=os.environ.get('HK_RECEIVER_EMULATOR_LOG_LEVEL', 'info'),
                        choices=['debug', 'info', 'warning', 'error', 'critical'],
                        help='''The logging level to use. Default: info''')
    parser.add_argument('-b', '--bind', default=os.environ.get('HK_RECEIVER_EMULATOR_BIND', '0.0.0.0'),
                        help='''The local IP address to bind to. Default: 0.0.0.0.''')
    parser.add_argument('--port', type=int, default=int(os.environ.get('HK_RECEIVER_EMULATOR_PORT', DEFAULT_PORT)),
                        help=f"The TCP port to listen on. Default: {DEFAULT_PORT}")
    parser.add_argument('--zones', default=os.environ.get('HK_RECEIVER_EMULATOR_ZONES'),
                        help='''Comma-separated zone names. Default: "Main Zone,Zone 2"''')
    parser.add_argument('--delay', type=float, default=float(os.environ.get('HK_RECEIVER_EMULATOR_DELAY', '0')),
                        help='''Seconds to wait before each response. Default: 0''')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.getLevelName(args.log_level.upper()),
      )
    return asyncio.run(arun_emulator(args))

if __name__ == "__main__":
    sys.exit(run())
