"""
Provider wrapper base class.

A ProviderWrapper sits in front of another provider, forwards every
request it does not care about, and gives subclasses helpers to read and
replace the transaction of an eth_sendTransaction request.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from txgas.errors import InvalidRequestParamsError
from txgas.types import EIP1193Provider, RequestArguments


class ProviderWrapper:
    """
    Base class for providers that decorate another provider.

    Subclasses override `request()` for the methods they handle and call
    `self._wrapped_provider.request()` for the rest. The caller's params
    are never mutated: a subclass that changes a transaction forwards a new
    request built with `_forward_with_transaction()`.

    Example:
        >>> class Logged(ProviderWrapper):
        ...     async def request(self, args):
        ...         print(args.method)
        ...         return await self._wrapped_provider.request(args)
    """

    def __init__(self, provider: EIP1193Provider) -> None:
        self._wrapped_provider = provider

    @property
    def wrapped_provider(self) -> EIP1193Provider:
        """The next provider in the chain."""
        return self._wrapped_provider

    async def request(self, args: RequestArguments) -> Any:
        return await self._wrapped_provider.request(args)

    def _get_params(self, args: RequestArguments) -> List[Any]:
        """
        Get a request's positional params.

        Returns:
            The params as a list ([] when the request has none)

        Raises:
            InvalidRequestParamsError: If params were sent by name
        """
        if args.params is None:
            return []
        if not isinstance(args.params, (list, tuple)):
            raise InvalidRequestParamsError(args.method, args.params)
        return list(args.params)

    @staticmethod
    def _get_transaction(params: List[Any]) -> Optional[Dict[str, Any]]:
        """Return a copy of the first param if it is a transaction object, else None."""
        if not params or not isinstance(params[0], Mapping):
            return None
        return dict(params[0])

    async def _forward_with_transaction(
        self,
        args: RequestArguments,
        params: List[Any],
        tx: Dict[str, Any],
    ) -> Any:
        """Forward `args` with its first param replaced by `tx`."""
        return await self._wrapped_provider.request(
            args.with_params([tx, *params[1:]])
        )
