#!/usr/bin/env python3
"""
Command line application running a fallback chain definition once.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Import after loading env vars to ensure proper configuration
from . import __version__
from .application import ChainService
from .domain.errors import FallbackError
from .infrastructure.config.settings import TRANSPORT_BACKENDS, reload_settings
from .infrastructure.logging_sink import FanOutEventSink, LoggingEventSink, MemoryEventSink
from .utils import format_body, setup_logging

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fallback-chain',
        description="Execute a request with an ordered chain of fallback requests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s chain.json                          # Run the chain with requests
  %(prog)s chain.json --transport httpx        # Use httpx instead
  %(prog)s chain.json --timeout 2 --quiet      # Short timeouts, body only
        """
    )
    parser.add_argument('chain',
                        help='Path to a JSON chain definition')
    parser.add_argument('--transport',
                        choices=list(TRANSPORT_BACKENDS),
                        help='HTTP backend (or set FALLBACK_BACKEND)')
    parser.add_argument('--timeout',
                        type=float,
                        help='Read timeout in seconds for every attempt (or set FALLBACK_READ_TIMEOUT_S)')
    parser.add_argument('--quiet',
                        action='store_true',
                        help='Print only the decoded body')
    parser.add_argument('--log-level',
                        default=os.getenv('LOG_LEVEL', 'WARNING'),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Set logging level')
    parser.add_argument('--version',
                        action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for fallback-chain."""
    args = build_parser().parse_args(argv)

    settings = reload_settings()
    setup_logging(args.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    updates = {}
    if args.transport:
        updates['backend'] = args.transport
    if args.timeout is not None:
        updates['read_timeout_s'] = max(0.1, args.timeout)
    if updates:
        settings.transport = settings.transport.model_copy(update=updates)
    quiet = args.quiet or settings.quiet

    events = MemoryEventSink()
    sink = FanOutEventSink(events, LoggingEventSink())

    try:
        with ChainService(settings=settings, event_logger=sink) as service:
            run = service.run_file(args.chain)
    except FallbackError as e:
        logger.error(f"Invalid chain: {e}")
        print(f"❌ Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    result = run.result
    if not quiet:
        for message in events.messages:
            print(f"↪ {message}")
        print(f"HTTP {result.status_code} from {result.served_by}")
        if result.error is not None:
            print(f"❌ {type(result.error).__name__}: {result.error}")
    print(format_body(run.body))

    return EXIT_OK if result.ok else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
