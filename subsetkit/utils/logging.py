"""
Shared logging configuration.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(message)s",
    handlers=[logging.StreamHandler()],
)

logger = logging.getLogger("subsetkit")


def set_verbose() -> None:
    """Emit debug messages (per-directive and per-iteration detail)."""
    logger.setLevel(logging.DEBUG)
