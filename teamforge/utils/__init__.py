"""
Utilities package.

Contains logging utilities.
"""

from teamforge.utils.logging import (
    configure_logging,
    get_logger,
    RequestContextMiddleware,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "RequestContextMiddleware",
]
