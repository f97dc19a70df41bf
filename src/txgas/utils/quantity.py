"""
RPC quantity helpers.

Quantities travel as 0x-prefixed hex strings without redundant leading
zeros ("0x0", "0x5208"). The encoding itself is done by eth_utils; these
helpers only pin down which inputs are acceptable.
"""

from __future__ import annotations

from eth_utils import is_0x_prefixed, is_hex, to_hex, to_int

from txgas.errors import InvalidQuantityError


def number_to_rpc_quantity(value: int) -> str:
    """
    Encode a non-negative integer as an RPC quantity.

    Args:
        value: Integer to encode

    Returns:
        Minimal 0x-prefixed hex string

    Raises:
        InvalidQuantityError: If value is not a non-negative integer

    Example:
        >>> number_to_rpc_quantity(21000)
        '0x5208'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidQuantityError(value, reason="not an integer")
    if value < 0:
        raise InvalidQuantityError(value, reason="negative")
    return to_hex(value)


def rpc_quantity_to_int(quantity: str) -> int:
    """
    Decode an RPC quantity into an integer.

    Raises:
        InvalidQuantityError: If quantity is not a 0x-prefixed hex string
    """
    if not isinstance(quantity, str) or not is_0x_prefixed(quantity):
        raise InvalidQuantityError(quantity, reason="expected 0x-prefixed hex string")
    if len(quantity) == 2 or not is_hex(quantity):
        raise InvalidQuantityError(quantity, reason="not hexadecimal")
    return to_int(hexstr=quantity)
