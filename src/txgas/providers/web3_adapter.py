"""
Adapter from web3.py async providers to EIP1193Provider.

Lets a web3 transport (AsyncHTTPProvider, WebSocketProvider, ...) sit at
the bottom of a policy chain.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from web3.providers.async_base import AsyncBaseProvider
from web3.types import RPCEndpoint

from txgas.errors import RpcError
from txgas.types import RequestArguments
from txgas.utils.logging import get_logger

_logger = get_logger(__name__)


class Web3ProviderAdapter:
    """
    Innermost link of a chain, backed by a web3.py async provider.

    Results are returned as the node sent them; an `error` member in the
    response is raised as RpcError with the node's message.

    Example:
        ```python
        from web3 import AsyncHTTPProvider

        transport = Web3ProviderAdapter(AsyncHTTPProvider("http://127.0.0.1:8545"))
        provider = AutomaticGasProvider(AutomaticGasPriceProvider(transport))
        ```
    """

    def __init__(self, provider: AsyncBaseProvider) -> None:
        self._provider = provider

    @property
    def web3_provider(self) -> AsyncBaseProvider:
        return self._provider

    async def request(self, args: RequestArguments) -> Any:
        params = list(args.params) if args.params is not None else []
        response = await self._provider.make_request(RPCEndpoint(args.method), params)

        if "error" in response and response["error"] is not None:
            error = response["error"]
            _logger.debug(
                "RPC call returned an error",
                extra={"method": args.method, "rpc_error": error},
            )
            if isinstance(error, Mapping):
                raise RpcError(
                    str(error.get("message", "Unknown RPC error")),
                    rpc_code=error.get("code"),
                    data=error.get("data"),
                    method=args.method,
                )
            raise RpcError(str(error), method=args.method)

        return response.get("result")
