from __future__ import annotations

import logging
import sys


def setup_logger(level: str = "INFO") -> logging.Logger:
    """
    Configure the "price_relay" logger tree once.

    Always writes to stderr: the stdio MCP transport owns stdout.
    """
    root = logging.getLogger("price_relay")
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s - %(message)s", "%H:%M:%S"))
        root.addHandler(handler)
        root.propagate = False
    return root
