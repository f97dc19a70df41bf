"""
Build a policy chain for a network's gas settings.
"""

from __future__ import annotations

from typing import Optional

from txgas.config import FeeMarketConfig, GasConfig
from txgas.providers.base import ProviderWrapper
from txgas.providers.gas import (
    AutomaticGasPriceProvider,
    AutomaticGasProvider,
    FixedGasPriceProvider,
    FixedGasProvider,
)
from txgas.types import EIP1193Provider


def apply_gas_policies(
    provider: EIP1193Provider,
    gas_config: Optional[GasConfig] = None,
    fee_market_config: Optional[FeeMarketConfig] = None,
) -> ProviderWrapper:
    """
    Wrap `provider` with the gas price policy, then the gas limit policy.

    The gas limit policy ends up outermost, so its eth_estimateGas call
    passes through the gas price policy untouched.

    Args:
        provider: Transport or inner chain
        gas_config: Gas settings (all "auto" by default)
        fee_market_config: EIP-1559 tuning for an automatic gas price

    Returns:
        The outermost provider of the chain

    Example:
        >>> chain = apply_gas_policies(transport, GasConfig(gas_multiplier=1.2))
    """
    gas_config = gas_config or GasConfig()
    fee_market_config = fee_market_config or FeeMarketConfig()

    if gas_config.auto_gas_price:
        provider = AutomaticGasPriceProvider(
            provider,
            reward_percentile=fee_market_config.reward_percentile,
            full_blocks_preference=fee_market_config.full_blocks_preference,
        )
    else:
        provider = FixedGasPriceProvider(provider, gas_config.gas_price)

    if gas_config.auto_gas:
        return AutomaticGasProvider(provider, gas_config.gas_multiplier)
    return FixedGasProvider(provider, gas_config.gas)
