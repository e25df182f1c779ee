from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TransportError(Exception):
    """
    Network or HTTP failure reported by a transport gateway.

    `message` is the human-readable text supplied by the remote system (if any).
    It is surfaced verbatim to the operator, so it is never rewritten here.
    """

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None) -> None:
        super().__init__(message or "Transport request failed")
        self.message = message
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Abstract transport interface
# ---------------------------------------------------------------------------

class TransportGateway(ABC):
    """Every catalog transport (real HTTP or local mock) must implement this interface."""

    @abstractmethod
    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        """Perform a GET request and return the decoded body."""

    @abstractmethod
    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        """Perform a POST request with a JSON body and return the decoded body."""

    @abstractmethod
    async def put(self, path: str, body: Dict[str, Any]) -> Any:
        """Perform a PUT request with a JSON body and return the decoded body."""

    @abstractmethod
    async def delete(self, path: str) -> Any:
        """Perform a DELETE request and return the decoded body."""
