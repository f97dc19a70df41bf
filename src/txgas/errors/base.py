"""
Root of the txgas exception hierarchy.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class TxGasError(Exception):
    """
    Raised by txgas itself, never for errors of a wrapped provider.

    `code` is a stable machine-readable tag; `details` holds whatever
    context helps when the error is logged.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str = "TXGAS_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = dict(details or {})

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form, suitable for a log record's `extra`."""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }
