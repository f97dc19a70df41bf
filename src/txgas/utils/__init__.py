"""
txgas Utilities.

This module provides the quantity codec helpers, compute-once cells and
logging setup used by the providers.
"""

from txgas.utils.logging import (
    configure_logging,
    disable_logging,
    enable_debug,
    get_logger,
    set_level,
)
from txgas.utils.once import AsyncOnce
from txgas.utils.quantity import number_to_rpc_quantity, rpc_quantity_to_int

__all__ = [
    # Quantities
    "number_to_rpc_quantity",
    "rpc_quantity_to_int",
    # Concurrency
    "AsyncOnce",
    # Logging
    "get_logger",
    "configure_logging",
    "set_level",
    "enable_debug",
    "disable_logging",
]
