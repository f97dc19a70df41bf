"""
Shared fixtures for provider tests.
"""

import asyncio
from typing import Any, Callable, Dict, List, Union

import pytest

from txgas.types import RequestArguments


# =============================================================================
# Test Constants
# =============================================================================

SENDER = "0x1234567890123456789012345678901234567890"
RECIPIENT = "0xabcdefABCDEFabcdefABCDEFabcdefABCDEFabcd"

BLOCK_GAS_LIMIT = 30_000_000
SAFE_BLOCK_GAS_LIMIT = 28_500_000  # 95% of BLOCK_GAS_LIMIT

TX_HASH = "0x" + "a" * 64


Response = Union[Any, Exception, Callable[[RequestArguments], Any]]


class MockProvider:
    """
    Scripted in-memory provider.

    Each method maps to a value to return, an exception to raise, or a
    callable receiving the request. Every request is recorded in `calls`.
    """

    def __init__(self, responses: Dict[str, Response]) -> None:
        self.responses = dict(responses)
        self.calls: List[RequestArguments] = []
        self.delay = 0.0

    async def request(self, args: RequestArguments) -> Any:
        self.calls.append(args)
        # Yield so concurrent callers interleave
        await asyncio.sleep(self.delay)

        if args.method not in self.responses:
            raise AssertionError(f"Unexpected RPC call: {args.method}")

        response = self.responses[args.method]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(args)
        return response

    def calls_to(self, method: str) -> List[RequestArguments]:
        return [call for call in self.calls if call.method == method]

    @property
    def sent_transaction(self) -> Dict[str, Any]:
        """The transaction of the last eth_sendTransaction that reached us."""
        return self.calls_to("eth_sendTransaction")[-1].params[0]


def latest_block(gas_limit: int = BLOCK_GAS_LIMIT, base_fee: Any = None) -> Dict[str, Any]:
    block = {"number": "0x10", "gasLimit": hex(gas_limit)}
    if base_fee is not None:
        block["baseFeePerGas"] = hex(base_fee)
    return block


def fee_history(next_base_fee: int, reward: int, base_fee: int = 90) -> Dict[str, Any]:
    return {
        "oldestBlock": "0x10",
        "baseFeePerGas": [hex(base_fee), hex(next_base_fee)],
        "gasUsedRatio": [0.5],
        "reward": [[hex(reward)]],
    }


def send_transaction(**fields: Any) -> RequestArguments:
    tx = {"from": SENDER, "to": RECIPIENT, "value": "0x1"}
    tx.update(fields)
    return RequestArguments("eth_sendTransaction", [tx])


# =============================================================================
# Fixtures - Providers
# =============================================================================


@pytest.fixture
def legacy_node() -> MockProvider:
    """A node without EIP-1559."""
    return MockProvider(
        {
            "eth_sendTransaction": TX_HASH,
            "eth_estimateGas": hex(100_000),
            "eth_getBlockByNumber": latest_block(),
            "eth_gasPrice": hex(20_000_000_000),
        }
    )


@pytest.fixture
def london_node() -> MockProvider:
    """A node with EIP-1559 and eth_feeHistory."""
    return MockProvider(
        {
            "eth_sendTransaction": TX_HASH,
            "eth_estimateGas": hex(100_000),
            "eth_getBlockByNumber": latest_block(base_fee=90),
            "eth_gasPrice": hex(20_000_000_000),
            "eth_feeHistory": fee_history(next_base_fee=100, reward=5),
        }
    )
