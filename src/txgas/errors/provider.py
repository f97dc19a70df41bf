"""
Provider-related exceptions.

These exceptions are raised while talking to a JSON-RPC provider or
while reading the arguments of a request passing through a policy chain.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from txgas.errors.base import TxGasError


class RpcError(TxGasError):
    """
    Raised when a JSON-RPC provider answers with an error object.

    The node's message is kept verbatim so callers can match on it
    (e.g. "execution error: revert").

    Example:
        >>> raise RpcError("execution reverted", rpc_code=-32000)
    """

    def __init__(
        self,
        message: str,
        *,
        rpc_code: Optional[int] = None,
        data: Any = None,
        method: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        details = dict(details or {})
        if rpc_code is not None:
            details["rpc_code"] = rpc_code
        if method:
            details["method"] = method
        if data is not None:
            details["data"] = data

        super().__init__(message, code="RPC_ERROR", details=details)
        self.rpc_code = rpc_code
        self.data = data
        self.method = method


class InvalidRequestParamsError(TxGasError):
    """
    Raised when a request's params are not a positional list.

    Example:
        >>> raise InvalidRequestParamsError("eth_sendTransaction", {"from": "0x..."})
    """

    def __init__(self, method: str, params: Any) -> None:
        super().__init__(
            f"Params for {method} must be a list, got {type(params).__name__}",
            code="INVALID_PARAMS",
            details={"method": method, "params_type": type(params).__name__},
        )
        self.method = method
        self.params = params


class InvalidQuantityError(TxGasError):
    """Raised when a value cannot be converted to or from an RPC quantity."""

    def __init__(self, value: Any, *, reason: Optional[str] = None) -> None:
        message = f"Invalid RPC quantity: {value!r}"
        if reason:
            message += f" ({reason})"

        super().__init__(
            message,
            code="INVALID_QUANTITY",
            details={"value": repr(value), "reason": reason},
        )
        self.value = value
        self.reason = reason
