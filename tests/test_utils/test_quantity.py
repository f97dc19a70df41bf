"""
Tests for RPC quantity helpers.
"""

import pytest

from txgas.errors import InvalidQuantityError
from txgas.utils.quantity import number_to_rpc_quantity, rpc_quantity_to_int


class TestNumberToRpcQuantity:
    """Tests for encoding integers."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0, "0x0"), (1, "0x1"), (21_000, "0x5208"), (2**256 - 1, "0x" + "f" * 64)],
    )
    def test_minimal_hex(self, value: int, expected: str) -> None:
        """Test integers encode without leading zeros."""
        assert number_to_rpc_quantity(value) == expected

    @pytest.mark.parametrize("value", [-1, 1.5, "0x1", True, None])
    def test_rejects_invalid(self, value: object) -> None:
        """Test non-integers and negatives are rejected."""
        with pytest.raises(InvalidQuantityError):
            number_to_rpc_quantity(value)  # type: ignore[arg-type]


class TestRpcQuantityToInt:
    """Tests for decoding quantities."""

    @pytest.mark.parametrize(
        "quantity,expected",
        [("0x0", 0), ("0x5208", 21_000), ("0x1C9C380", 30_000_000)],
    )
    def test_decodes(self, quantity: str, expected: int) -> None:
        """Test hex quantities decode to integers."""
        assert rpc_quantity_to_int(quantity) == expected

    @pytest.mark.parametrize("quantity", ["0x", "5208", "0xzz", "", 21_000, None])
    def test_rejects_invalid(self, quantity: object) -> None:
        """Test malformed quantities are rejected."""
        with pytest.raises(InvalidQuantityError) as exc_info:
            rpc_quantity_to_int(quantity)  # type: ignore[arg-type]

        assert exc_info.value.code == "INVALID_QUANTITY"
