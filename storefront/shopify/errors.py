"""Storefront API error taxonomy.

Every failure carries an explicit ``kind`` and the structured detail list
returned by the remote API (GraphQL ``errors`` or mutation ``userErrors``).
"""
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class ErrorKind(str, Enum):
    """What went wrong, independent of the exception class."""
    CONFIGURATION = "configuration"  # client used before shop/token were set
    REMOTE_QUERY = "remote_query"  # remote returned an error list
    TRANSPORT = "transport"  # network failure or unparseable reply


class StorefrontError(Exception):
    """Base class for all remote API client failures."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str, details: Optional[Iterable[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details: List[Dict[str, Any]] = list(details or [])

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "message": self.message, "details": self.details}

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


class ConfigurationError(StorefrontError):
    """Client invoked before shop and token were configured. Never retried."""
    kind = ErrorKind.CONFIGURATION


class RemoteQueryError(StorefrontError):
    """The remote API answered with an error list."""
    kind = ErrorKind.REMOTE_QUERY


class TransportError(StorefrontError):
    """The request did not produce a usable GraphQL reply."""
    kind = ErrorKind.TRANSPORT


def normalize_error_list(errors: Any) -> List[Dict[str, Any]]:
    """Shopify sometimes sends ``"errors": "Not Found"`` instead of a list."""
    if isinstance(errors, list):
        return [e if isinstance(e, dict) else {"message": str(e)} for e in errors]
    if isinstance(errors, dict):
        return [errors]
    return [{"message": str(errors)}]
