"""
Gas policies for eth_sendTransaction.

Provides:
- FixedGasProvider: Fills a missing gas limit with a constant
- FixedGasPriceProvider: Fills a missing legacy gas price with a constant
- AutomaticGasProvider: Fills a missing gas limit from eth_estimateGas
- AutomaticGasPriceProvider: Fills missing legacy or EIP-1559 fee fields
  from the node's current prices and fee history

Every policy leaves requests other than eth_sendTransaction alone and
never overwrites a field the caller set. A field holding None counts as
missing.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from txgas.config import (
    BLOCK_GAS_LIMIT_SAFETY_PERCENT,
    DEFAULT_GAS_MULTIPLIER,
    EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE,
    EIP1559_REWARD_PERCENTILE,
)
from txgas.providers.base import ProviderWrapper
from txgas.types import (
    ETH_ESTIMATE_GAS,
    ETH_FEE_HISTORY,
    ETH_GAS_PRICE,
    ETH_GET_BLOCK_BY_NUMBER,
    ETH_SEND_TRANSACTION,
    EIP1193Provider,
    Eip1559FeeValues,
    FeatureSupport,
    RequestArguments,
)
from txgas.utils.logging import get_logger
from txgas.utils.once import AsyncOnce
from txgas.utils.quantity import number_to_rpc_quantity, rpc_quantity_to_int

_logger = get_logger(__name__)

_LATEST_BLOCK = RequestArguments(ETH_GET_BLOCK_BY_NUMBER, ["latest", False])


def _is_missing(tx: Dict[str, Any], field: str) -> bool:
    return tx.get(field) is None


def _is_execution_error(error: Exception) -> bool:
    """Whether an eth_estimateGas failure means the call itself would fail."""
    return "execution error" in str(error).lower()


class FixedGasProvider(ProviderWrapper):
    """Sets `gas` to a fixed value on transactions that lack one."""

    def __init__(self, provider: EIP1193Provider, gas_limit: int) -> None:
        super().__init__(provider)
        self._gas_limit = gas_limit

    async def request(self, args: RequestArguments) -> Any:
        if args.method == ETH_SEND_TRANSACTION:
            params = self._get_params(args)
            tx = self._get_transaction(params)
            if tx is not None and _is_missing(tx, "gas"):
                tx["gas"] = number_to_rpc_quantity(self._gas_limit)
                _logger.debug("Using fixed gas limit", extra={"gas": self._gas_limit})
                return await self._forward_with_transaction(args, params, tx)

        return await self._wrapped_provider.request(args)


class FixedGasPriceProvider(ProviderWrapper):
    """
    Sets `gasPrice` to a fixed value on transactions that carry no pricing.

    A transaction with either EIP-1559 field is left untouched, so the two
    pricing models are never mixed.
    """

    def __init__(self, provider: EIP1193Provider, gas_price: int) -> None:
        super().__init__(provider)
        self._gas_price = gas_price

    async def request(self, args: RequestArguments) -> Any:
        if args.method == ETH_SEND_TRANSACTION:
            params = self._get_params(args)
            tx = self._get_transaction(params)
            if (
                tx is not None
                and _is_missing(tx, "gasPrice")
                and _is_missing(tx, "maxFeePerGas")
                and _is_missing(tx, "maxPriorityFeePerGas")
            ):
                tx["gasPrice"] = number_to_rpc_quantity(self._gas_price)
                _logger.debug(
                    "Using fixed gas price", extra={"gas_price": self._gas_price}
                )
                return await self._forward_with_transaction(args, params, tx)

        return await self._wrapped_provider.request(args)


class MultipliedGasEstimationProvider(ProviderWrapper):
    """
    Shared gas estimation for providers that fill the gas limit.

    The node's estimate is multiplied by `gas_multiplier` and capped just
    below the usable block gas limit. The block gas limit is read from the
    latest block once per instance, lowered by 5% to absorb small changes
    before inclusion, and never refreshed.

    Not meant to be used directly; see AutomaticGasProvider.
    """

    def __init__(
        self,
        provider: EIP1193Provider,
        gas_multiplier: float = DEFAULT_GAS_MULTIPLIER,
    ) -> None:
        super().__init__(provider)
        self._gas_multiplier = gas_multiplier
        self._block_gas_limit: AsyncOnce[int] = AsyncOnce()

    @property
    def gas_multiplier(self) -> float:
        return self._gas_multiplier

    @property
    def block_gas_limit(self) -> Optional[int]:
        """Cached usable block gas limit, or None before the first fetch."""
        return self._block_gas_limit.value

    async def _get_multiplied_gas_estimation(self, params: List[Any]) -> str:
        """
        Estimate the gas limit for the transaction in `params`.

        Args:
            params: Positional params for eth_estimateGas

        Returns:
            Gas limit as an RPC quantity

        Raises:
            Exception: Whatever the wrapped provider raised, unless the
                message reports an execution error. In that case the usable
                block gas limit is returned instead, since the real usage
                cannot be known for a call that fails.
        """
        try:
            real_estimation = await self._wrapped_provider.request(
                RequestArguments(ETH_ESTIMATE_GAS, params)
            )
        except Exception as error:
            if not _is_execution_error(error):
                raise
            block_gas_limit = await self._get_block_gas_limit()
            _logger.warning(
                "Gas estimation hit an execution error, using block gas limit",
                extra={"error": str(error), "gas": block_gas_limit},
            )
            return number_to_rpc_quantity(block_gas_limit)

        if self._gas_multiplier == 1:
            return real_estimation

        normal_gas = rpc_quantity_to_int(real_estimation)
        gas_limit = await self._get_block_gas_limit()

        multiplied = math.floor(normal_gas * self._gas_multiplier)
        gas = gas_limit - 1 if multiplied > gas_limit else multiplied

        _logger.debug(
            "Multiplied gas estimation",
            extra={
                "estimated": normal_gas,
                "multiplier": self._gas_multiplier,
                "gas": gas,
            },
        )
        return number_to_rpc_quantity(gas)

    async def _get_block_gas_limit(self) -> int:
        return await self._block_gas_limit.get(self._fetch_block_gas_limit)

    async def _fetch_block_gas_limit(self) -> int:
        latest_block = await self._wrapped_provider.request(_LATEST_BLOCK)
        fetched_gas_limit = rpc_quantity_to_int(latest_block["gasLimit"])

        # Keep a margin in case the limit varies slightly before inclusion
        block_gas_limit = fetched_gas_limit * BLOCK_GAS_LIMIT_SAFETY_PERCENT // 100

        _logger.debug(
            "Cached block gas limit",
            extra={"fetched": fetched_gas_limit, "block_gas_limit": block_gas_limit},
        )
        return block_gas_limit


class AutomaticGasProvider(MultipliedGasEstimationProvider):
    """Sets `gas` from a (multiplied) eth_estimateGas on transactions that lack one."""

    async def request(self, args: RequestArguments) -> Any:
        if args.method == ETH_SEND_TRANSACTION:
            params = self._get_params(args)
            tx = self._get_transaction(params)
            if tx is not None and _is_missing(tx, "gas"):
                tx["gas"] = await self._get_multiplied_gas_estimation(params)
                return await self._forward_with_transaction(args, params, tx)

        return await self._wrapped_provider.request(args)


class AutomaticGasPriceProvider(ProviderWrapper):
    """
    Prices transactions from the node's current fee market.

    Transactions that already set `gasPrice`, or both EIP-1559 fields, are
    forwarded untouched. Otherwise:

    - On a node with EIP-1559 and eth_feeHistory, missing fields are taken
      from fee history: the priority fee is the requested reward percentile
      of the latest block, and the max fee is the next block's base fee
      raised enough to survive `full_blocks_preference` full blocks.
    - Without fee history, a transaction with no fee fields gets a legacy
      `gasPrice` from eth_gasPrice, and one with a single EIP-1559 field gets
      the other from eth_gasPrice.

    If the resulting maxFeePerGas is below maxPriorityFeePerGas, the
    priority fee is added to the max fee.

    Whether the node supports EIP-1559 is probed once per instance. A failed
    eth_feeHistory call marks it unsupported for the rest of the instance's
    life.

    Example:
        >>> provider = AutomaticGasPriceProvider(transport)
        >>> await provider.request(RequestArguments("eth_sendTransaction", [tx]))
    """

    # We pay the max base fee that can be required if the next
    # EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE blocks are full.
    EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE = EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE

    # See eth_feeHistory for an explanation of what this means
    EIP1559_REWARD_PERCENTILE = EIP1559_REWARD_PERCENTILE

    def __init__(
        self,
        provider: EIP1193Provider,
        *,
        reward_percentile: float = EIP1559_REWARD_PERCENTILE,
        full_blocks_preference: int = EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE,
    ) -> None:
        super().__init__(provider)
        self._reward_percentile = reward_percentile
        self._full_blocks_preference = full_blocks_preference
        self._eip1559_support: AsyncOnce[FeatureSupport] = AsyncOnce()
        self._fee_history_support = FeatureSupport.UNKNOWN
        self._fee_history_lock = asyncio.Lock()

    @property
    def eip1559_support(self) -> FeatureSupport:
        return self._eip1559_support.value or FeatureSupport.UNKNOWN

    @property
    def fee_history_support(self) -> FeatureSupport:
        return self._fee_history_support

    async def request(self, args: RequestArguments) -> Any:
        if args.method != ETH_SEND_TRANSACTION:
            return await self._wrapped_provider.request(args)

        params = self._get_params(args)
        tx = self._get_transaction(params)

        if tx is None:
            return await self._wrapped_provider.request(args)

        # Pricing is already fully specified
        if not _is_missing(tx, "gasPrice") or (
            not _is_missing(tx, "maxFeePerGas")
            and not _is_missing(tx, "maxPriorityFeePerGas")
        ):
            return await self._wrapped_provider.request(args)

        suggested = await self._suggest_eip1559_fee_price_values()

        # eth_feeHistory failed, so we send a legacy one
        if (
            _is_missing(tx, "maxFeePerGas")
            and _is_missing(tx, "maxPriorityFeePerGas")
            and suggested is None
        ):
            gas_price = await self._get_gas_price()
            tx["gasPrice"] = number_to_rpc_quantity(gas_price)
            _logger.debug("Using legacy gas price", extra={"gas_price": gas_price})
            return await self._forward_with_transaction(args, params, tx)

        # The caller wants an EIP-1559 tx but fee history is unavailable
        if suggested is None:
            gas_price = await self._get_gas_price()
            suggested = Eip1559FeeValues(
                max_fee_per_gas=gas_price,
                max_priority_fee_per_gas=gas_price,
            )

        max_fee_per_gas = (
            suggested.max_fee_per_gas
            if _is_missing(tx, "maxFeePerGas")
            else rpc_quantity_to_int(tx["maxFeePerGas"])
        )
        max_priority_fee_per_gas = (
            suggested.max_priority_fee_per_gas
            if _is_missing(tx, "maxPriorityFeePerGas")
            else rpc_quantity_to_int(tx["maxPriorityFeePerGas"])
        )

        if max_fee_per_gas < max_priority_fee_per_gas:
            max_fee_per_gas = max_fee_per_gas + max_priority_fee_per_gas

        tx["maxFeePerGas"] = number_to_rpc_quantity(max_fee_per_gas)
        tx["maxPriorityFeePerGas"] = number_to_rpc_quantity(max_priority_fee_per_gas)

        _logger.debug(
            "Using EIP-1559 fees",
            extra={
                "max_fee_per_gas": max_fee_per_gas,
                "max_priority_fee_per_gas": max_priority_fee_per_gas,
            },
        )
        return await self._forward_with_transaction(args, params, tx)

    async def _get_gas_price(self) -> int:
        response = await self._wrapped_provider.request(RequestArguments(ETH_GAS_PRICE))
        return rpc_quantity_to_int(response)

    async def _detect_eip1559_support(self) -> FeatureSupport:
        block = await self._wrapped_provider.request(_LATEST_BLOCK)
        has_base_fee = isinstance(block, Mapping) and block.get("baseFeePerGas") is not None
        support = FeatureSupport.SUPPORTED if has_base_fee else FeatureSupport.UNSUPPORTED

        _logger.debug("Detected EIP-1559 support", extra={"support": support.value})
        return support

    async def _suggest_eip1559_fee_price_values(self) -> Optional[Eip1559FeeValues]:
        """
        Suggest EIP-1559 fees from the latest block's fee history.

        Returns:
            Suggested fees, or None if the node lacks EIP-1559 or eth_feeHistory
        """
        eip1559_support = await self._eip1559_support.get(self._detect_eip1559_support)

        if eip1559_support is FeatureSupport.UNSUPPORTED:
            return None

        if self._fee_history_support is FeatureSupport.UNKNOWN:
            # Concurrent first requests wait for one probe of eth_feeHistory
            async with self._fee_history_lock:
                if self._fee_history_support is FeatureSupport.UNKNOWN:
                    return await self._fetch_fee_history_values()

        if self._fee_history_support is FeatureSupport.UNSUPPORTED:
            return None

        return await self._fetch_fee_history_values()

    async def _fetch_fee_history_values(self) -> Optional[Eip1559FeeValues]:
        try:
            response = await self._wrapped_provider.request(
                RequestArguments(
                    ETH_FEE_HISTORY,
                    ["0x1", "latest", [self._reward_percentile]],
                )
            )

            # Each full block raises the base fee by 1/8 at most. We have the
            # next block's base fee, so this caps the next N blocks.
            exponent = self._full_blocks_preference - 1
            next_base_fee = rpc_quantity_to_int(response["baseFeePerGas"][1])
            values = Eip1559FeeValues(
                max_fee_per_gas=next_base_fee * 9**exponent // 8**exponent,
                max_priority_fee_per_gas=rpc_quantity_to_int(response["reward"][0][0]),
            )
        except Exception as error:
            self._fee_history_support = FeatureSupport.UNSUPPORTED
            _logger.warning(
                "eth_feeHistory unavailable, falling back to eth_gasPrice",
                extra={"error": str(error)},
            )
            return None

        self._fee_history_support = FeatureSupport.SUPPORTED
        return values
