"""
FastAPI application - Main entry point

Run with:
  uvicorn src.api.main:app --host 127.0.0.1 --port 8000
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import os
from datetime import datetime

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.dependencies import api_key_protection, get_catalog_store
from src.api.endpoints.catalog import catalog_api
from src.catalog.store import CatalogStore

# Setup logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Product Catalog Admin API",
    description="Operator API over the client-side product catalog synchronization store",
    version="1.0.0",
    dependencies=[Depends(api_key_protection)],  # protect everything by default
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register catalog router
app.include_router(catalog_api, prefix="/api/v1/catalog", tags=["Catalog"])


# ============================================================================
# ENDPOINTS
# ============================================================================
@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"service": "Product Catalog Admin API", "status": "healthy", "version": "1.0.0", "timestamp": datetime.now().isoformat()}


@app.get("/health", tags=["Health"])
async def health_check(store: CatalogStore = Depends(get_catalog_store)):
    """Health check with the store's loading flag."""
    state = store.state
    return {"status": "healthy", "catalog": {"is_loading": state.is_loading, "error": state.error}, "timestamp": datetime.now().isoformat()}


# ============================================================================
# STARTUP/SHUTDOWN EVENTS
# ============================================================================
@app.on_event("startup")
async def startup_event():
    """Initialize on startup"""
    logger.info("Starting Product Catalog Admin API...")
    get_catalog_store()


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down Product Catalog Admin API...")
