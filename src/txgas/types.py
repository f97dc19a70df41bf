"""
Core types shared by every provider in a policy chain.

Provides:
- RequestArguments: An immutable JSON-RPC request (method + positional params)
- EIP1193Provider: The single-method provider interface
- FeatureSupport: Tri-state result of a node feature probe
- Eip1559FeeValues: A suggested (maxFeePerGas, maxPriorityFeePerGas) pair
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Optional, Protocol, Sequence, runtime_checkable


# ============================================================================
# JSON-RPC Method Names
# ============================================================================

ETH_SEND_TRANSACTION = "eth_sendTransaction"
ETH_ESTIMATE_GAS = "eth_estimateGas"
ETH_GET_BLOCK_BY_NUMBER = "eth_getBlockByNumber"
ETH_GAS_PRICE = "eth_gasPrice"
ETH_FEE_HISTORY = "eth_feeHistory"


@dataclass(frozen=True)
class RequestArguments:
    """
    A JSON-RPC request travelling through a provider chain.

    Attributes:
        method: JSON-RPC method name (e.g. "eth_sendTransaction")
        params: Positional parameters, or None when the method takes none
    """

    method: str
    params: Optional[Sequence[Any]] = None

    def with_params(self, params: Sequence[Any]) -> RequestArguments:
        """Return a copy of this request carrying a new parameter list."""
        return replace(self, params=list(params))


@runtime_checkable
class EIP1193Provider(Protocol):
    """Anything that can answer a JSON-RPC request asynchronously."""

    async def request(self, args: RequestArguments) -> Any:
        ...


class FeatureSupport(Enum):
    """Result of probing a node for an optional feature."""

    UNKNOWN = "unknown"
    """Not probed yet."""

    SUPPORTED = "supported"
    """The node exposes the feature."""

    UNSUPPORTED = "unsupported"
    """The node lacks the feature. Never probed again."""


@dataclass(frozen=True)
class Eip1559FeeValues:
    """Fee-market values suggested for a single transaction, in wei."""

    max_fee_per_gas: int
    max_priority_fee_per_gas: int
