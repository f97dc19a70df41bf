"""
txgas exception hierarchy.

All exceptions raised by txgas itself derive from TxGasError. Errors
coming from a wrapped provider are propagated unchanged.
"""

from txgas.errors.base import TxGasError
from txgas.errors.provider import (
    InvalidQuantityError,
    InvalidRequestParamsError,
    RpcError,
)

__all__ = [
    "TxGasError",
    "RpcError",
    "InvalidRequestParamsError",
    "InvalidQuantityError",
]
