"""
Catalog HTTP Transport.

Purpose:
- Performs the raw HTTP calls against the remote catalog API (DummyJSON-compatible)
- Returns decoded JSON bodies, or raises TransportError carrying the server's message

Usage:
- Wired in src/api/main.py when real integrations are enabled
- Called by CatalogClient (src/integrations/services/catalog_service.py) only

Important:
- Keep this transport as the ONLY place where catalog HTTP calls are made.
- No retries here: a failed call is reported once and surfaced to the operator.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from src.integrations.contracts.interfaces import TransportError, TransportGateway

logger = logging.getLogger(__name__)


class HttpTransport(TransportGateway):
    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout_seconds: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not base_url:
            raise ValueError("Catalog API base URL is not configured.")
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout_seconds = timeout_seconds
        # Injected httpx transport (e.g. httpx.MockTransport in tests)
        self._transport = transport

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> Any:
        return await self._request("GET", path, params=query)

    async def post(self, path: str, body: Dict[str, Any]) -> Any:
        return await self._request("POST", path, json=body)

    async def put(self, path: str, body: Dict[str, Any]) -> Any:
        return await self._request("PUT", path, json=body)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    def _headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("Catalog request: %s %s params=%s", method, url, params)
        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self._transport) as client:
                response = await client.request(method, url, params=params, json=json, headers=self._headers())
                response.raise_for_status()
                data = response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            logger.error("HTTP error from catalog API: %s %s -> %s", method, url, e.response.status_code)
            raise TransportError(_error_message(e.response), status_code=e.response.status_code) from e
        except httpx.RequestError as e:
            logger.error("Request error connecting to catalog API: %s", e)
            raise TransportError(None) from e
        except ValueError as e:
            # Body was not valid JSON
            logger.error("Undecodable response from catalog API: %s %s", method, url)
            raise TransportError(None, status_code=response.status_code) from e

        logger.debug("Catalog response: %s %s -> %s", method, url, response.status_code)
        return data


def _error_message(response: httpx.Response) -> Optional[str]:
    """Return the `message` field of an error body, if the server sent one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None
