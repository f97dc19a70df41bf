"""
Gas Policy Configuration

Constructor-time settings for the gas and gas-price policies. Values are
validated once when the model is built and never re-checked at runtime.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_GAS_MULTIPLIER = 1
"""Multiplier applied to eth_estimateGas results when none is configured."""

EIP1559_REWARD_PERCENTILE = 50
"""Reward percentile requested from eth_feeHistory."""

EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE = 3
"""Number of consecutive full blocks the suggested maxFeePerGas must survive."""

BLOCK_GAS_LIMIT_SAFETY_PERCENT = 95
"""Share of the latest block's gas limit kept as the usable block gas limit."""

AUTO = "auto"


class GasConfig(BaseModel):
    """
    Gas limit and gas price settings for a network.

    Example:
        ```python
        config = GasConfig(gas="auto", gas_price=8_000_000_000, gas_multiplier=1.5)
        ```
    """

    model_config = ConfigDict(frozen=True)

    gas: Union[Literal["auto"], Annotated[int, Field(ge=0)]] = Field(
        default=AUTO,
        description='Fixed gas limit, or "auto" to estimate it per transaction',
    )
    gas_price: Union[Literal["auto"], Annotated[int, Field(ge=0)]] = Field(
        default=AUTO,
        description='Fixed legacy gas price in wei, or "auto" to query the node',
    )
    gas_multiplier: float = Field(
        default=DEFAULT_GAS_MULTIPLIER,
        gt=0,
        description="Factor applied to eth_estimateGas when gas is auto",
    )

    @property
    def auto_gas(self) -> bool:
        return self.gas == AUTO

    @property
    def auto_gas_price(self) -> bool:
        return self.gas_price == AUTO


class FeeMarketConfig(BaseModel):
    """Tuning for the EIP-1559 fee suggestions of the automatic gas price policy."""

    model_config = ConfigDict(frozen=True)

    reward_percentile: float = Field(
        default=EIP1559_REWARD_PERCENTILE,
        ge=0,
        le=100,
        description="Priority fee percentile requested from eth_feeHistory",
    )
    full_blocks_preference: int = Field(
        default=EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE,
        ge=1,
        description="Consecutive full blocks the max fee must cover",
    )
