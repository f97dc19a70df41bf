"""
txgas - gas policies for Ethereum JSON-RPC providers.

Each policy wraps another provider and fills in the gas fields that an
eth_sendTransaction request leaves out, then passes the request on.

Quick Start:
    >>> import asyncio
    >>> from web3 import AsyncHTTPProvider
    >>> from txgas import GasConfig, RequestArguments, Web3ProviderAdapter, apply_gas_policies
    >>>
    >>> async def main():
    ...     transport = Web3ProviderAdapter(AsyncHTTPProvider("http://127.0.0.1:8545"))
    ...     provider = apply_gas_policies(transport, GasConfig(gas_multiplier=1.2))
    ...     tx_hash = await provider.request(
    ...         RequestArguments("eth_sendTransaction", [{"from": "0x...", "to": "0x..."}])
    ...     )
    ...
    >>> asyncio.run(main())

Modules:
- `providers`: ProviderWrapper, the gas policies, and the web3 adapter
- `config`: GasConfig and FeeMarketConfig
- `types`: RequestArguments, EIP1193Provider, FeatureSupport
- `errors`: Exception hierarchy
- `utils`: Quantity helpers, compute-once cells, and logging setup
"""

from txgas.version import __version__, __version_info__

from txgas.config import (
    BLOCK_GAS_LIMIT_SAFETY_PERCENT,
    DEFAULT_GAS_MULTIPLIER,
    EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE,
    EIP1559_REWARD_PERCENTILE,
    FeeMarketConfig,
    GasConfig,
)
from txgas.errors import (
    InvalidQuantityError,
    InvalidRequestParamsError,
    RpcError,
    TxGasError,
)
from txgas.providers import (
    AutomaticGasPriceProvider,
    AutomaticGasProvider,
    FixedGasPriceProvider,
    FixedGasProvider,
    MultipliedGasEstimationProvider,
    ProviderWrapper,
    Web3ProviderAdapter,
    apply_gas_policies,
)
from txgas.types import (
    EIP1193Provider,
    Eip1559FeeValues,
    FeatureSupport,
    RequestArguments,
)

__all__ = [
    "__version__",
    "__version_info__",
    # Providers
    "ProviderWrapper",
    "FixedGasProvider",
    "FixedGasPriceProvider",
    "MultipliedGasEstimationProvider",
    "AutomaticGasProvider",
    "AutomaticGasPriceProvider",
    "Web3ProviderAdapter",
    "apply_gas_policies",
    # Config
    "GasConfig",
    "FeeMarketConfig",
    "DEFAULT_GAS_MULTIPLIER",
    "EIP1559_REWARD_PERCENTILE",
    "EIP1559_BASE_FEE_MAX_FULL_BLOCKS_PREFERENCE",
    "BLOCK_GAS_LIMIT_SAFETY_PERCENT",
    # Types
    "RequestArguments",
    "EIP1193Provider",
    "FeatureSupport",
    "Eip1559FeeValues",
    # Errors
    "TxGasError",
    "RpcError",
    "InvalidRequestParamsError",
    "InvalidQuantityError",
]
