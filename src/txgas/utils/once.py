"""
Compute-once cells for lazily discovered, never refreshed values.

Several concurrent requests may need the same value (a block gas limit,
whether the node speaks EIP-1559) before anyone has fetched it. AsyncOnce
lets them share a single in-flight computation.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class AsyncOnce(Generic[T]):
    """
    A value computed at most once per instance.

    Concurrent callers of `get()` wait on one another; only the first runs
    the factory. If the factory raises, the cell stays empty and the error
    reaches that caller, so a later call tries again.

    Example:
        ```python
        block_gas_limit: AsyncOnce[int] = AsyncOnce()

        async def fetch() -> int:
            ...

        limit = await block_gas_limit.get(fetch)
        ```
    """

    def __init__(self) -> None:
        self._value: Optional[T] = None
        self._is_set = False
        self._lock = asyncio.Lock()

    @property
    def is_set(self) -> bool:
        return self._is_set

    @property
    def value(self) -> Optional[T]:
        """The cached value, or None while unset."""
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self._is_set = True

    async def get(self, factory: Callable[[], Awaitable[T]]) -> T:
        if self._is_set:
            return self._value  # type: ignore[return-value]

        async with self._lock:
            # Another caller may have filled the cell while we waited
            if not self._is_set:
                self.set(await factory())

        return self._value  # type: ignore[return-value]
