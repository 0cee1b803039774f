"""
Utility functions for fallback-chain.
"""

import json
import logging
import sys
from typing import Any


def setup_logging(level: str = "INFO", fmt: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s') -> None:
    """Setup logging configuration."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=fmt,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )

    # Reduce noise from third-party libraries unless debugging
    if level.upper() != "DEBUG":
        for name in ("httpx", "httpcore", "urllib3", "requests"):
            logging.getLogger(name).setLevel(logging.WARNING)


def format_body(body: Any, max_length: int = 2000) -> str:
    """Render a decoded body for terminal output."""
    try:
        text = json.dumps(body, indent=2, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        text = repr(body)
    return truncate_text(text, max_length)


def truncate_text(text: str, max_length: int = 100) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_length:
        return text
    return text[:max_length-3] + "..."
