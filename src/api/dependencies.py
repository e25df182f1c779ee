import os
import hmac
import logging
from typing import Optional

from fastapi import Header, HTTPException, status, Request
from dotenv import load_dotenv

from src.catalog.store import CatalogStore
from src.integrations.clients.mocks.local_product_catalogues import LocalCatalogTransport
from src.integrations.clients.real_http.http_transport import HttpTransport
from src.integrations.contracts.interfaces import TransportGateway
from src.integrations.services.catalog_service import CatalogClient
from src.utils.config_loader import CatalogConfig, load_catalog_config, use_real_integrations

load_dotenv()

logger = logging.getLogger(__name__)

_ALLOWLIST_PATHS = {
    "/",
    "/health",
    "/docs",
    "/docs/oauth2-redirect",
    "/openapi.json",
    "/redoc",
}

_store: Optional[CatalogStore] = None


def get_api_keys():
    keys = os.getenv("API_KEYS", "")
    return [k.strip() for k in keys.split(",") if k.strip()]


async def api_key_protection(
    request: Request = None,  # keep Request type so FastAPI injects it; default None for direct calls/tests
    x_api_key: str = Header(default=None, alias="X-API-KEY"),
):
    path = request.url.path if request is not None else "<no-request>"
    if request is not None and request.url.path in _ALLOWLIST_PATHS:
        return

    valid_keys = get_api_keys()
    if not valid_keys:
        # No keys configured: local development mode
        return

    candidate = (x_api_key or "").strip()
    ok = bool(candidate) and any(hmac.compare_digest(candidate, k) for k in valid_keys)
    if not ok:
        logger.info("API key check failed: path=%s header_present=%s", path, bool(x_api_key))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing API Key",
        )


# ============================================================================
# CATALOG WIRING
# ============================================================================

def build_transport(config: CatalogConfig) -> TransportGateway:
    """Select the real HTTP transport or the local mock. This is the only switch point."""
    if use_real_integrations(config):
        logger.info("Using catalog HTTP transport at %s", config.api_url)
        return HttpTransport(
            base_url=config.api_url,
            api_token=config.api_token,
            timeout_seconds=config.timeout_seconds,
        )
    logger.info("Using local mock catalog transport")
    return LocalCatalogTransport()


def build_catalog_store(config: CatalogConfig) -> CatalogStore:
    return CatalogStore(
        CatalogClient(build_transport(config)),
        serialize_operations=config.serialize_operations,
        default_page_size=config.default_page_size,
    )


def get_catalog_store() -> CatalogStore:
    """Process-wide store, created on first use."""
    global _store
    if _store is None:
        _store = build_catalog_store(load_catalog_config())
    return _store
