"""
Providers: the wrapper base class, the gas policies and the web3 adapter.
"""

from txgas.providers.base import ProviderWrapper
from txgas.providers.factory import apply_gas_policies
from txgas.providers.gas import (
    AutomaticGasPriceProvider,
    AutomaticGasProvider,
    FixedGasPriceProvider,
    FixedGasProvider,
    MultipliedGasEstimationProvider,
)
from txgas.providers.web3_adapter import Web3ProviderAdapter

__all__ = [
    "ProviderWrapper",
    "FixedGasProvider",
    "FixedGasPriceProvider",
    "MultipliedGasEstimationProvider",
    "AutomaticGasProvider",
    "AutomaticGasPriceProvider",
    "Web3ProviderAdapter",
    "apply_gas_policies",
]
