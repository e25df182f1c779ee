"""
Configuration loader for the catalog admin core
"""

import os
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError
import logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "catalog_config.yml"

# Environment variable -> config field
_ENV_OVERRIDES = {
    "CATALOG_API_URL": "api_url",
    "CATALOG_API_TOKEN": "api_token",
    "CATALOG_TIMEOUT_SECONDS": "timeout_seconds",
    "CATALOG_DEFAULT_PAGE_SIZE": "default_page_size",
    "INTEGRATIONS_MODE": "integrations_mode",
    "CATALOG_SERIALIZE_OPERATIONS": "serialize_operations",
    "LOG_LEVEL": "log_level",
}


class CatalogConfig(BaseModel):
    """Catalog API and store configuration"""

    api_url: str = "https://dummyjson.com"
    api_token: Optional[str] = None
    timeout_seconds: float = Field(gt=0.0, default=15.0)
    default_page_size: int = Field(ge=1, le=100, default=10)
    integrations_mode: Literal["auto", "real", "live", "mock", "test"] = "auto"
    serialize_operations: bool = False
    log_level: str = "INFO"


def load_catalog_config(config_path: Optional[Path] = None) -> CatalogConfig:
    """
    Load and validate catalog configuration from YAML file and environment

    Args:
        config_path: Path to config file. Defaults to config/catalog_config.yml,
            which may be absent.

    Returns:
        Validated CatalogConfig object

    Raises:
        FileNotFoundError: If an explicitly given config file doesn't exist
        ValidationError: If config doesn't match schema
    """
    load_dotenv()

    config_data: Dict[str, Any] = {}
    if config_path is None:
        if DEFAULT_CONFIG_PATH.exists():
            config_data = _read_yaml(DEFAULT_CONFIG_PATH)
    else:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        config_data = _read_yaml(config_path)

    for env_name, field_name in _ENV_OVERRIDES.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            config_data[field_name] = value.strip()

    try:
        config = CatalogConfig(**config_data)
        logger.info(f"Catalog config loaded (api_url={config.api_url}, mode={config.integrations_mode})")
        return config
    except ValidationError as e:
        logger.error(f"Config validation failed: {e}")
        raise


def use_real_integrations(config: CatalogConfig) -> bool:
    """Decide between the real HTTP transport and the local mock transport"""
    mode = config.integrations_mode
    if mode in {"real", "live"}:
        return True
    if mode in {"mock", "test"}:
        return False
    return bool(os.getenv("CATALOG_API_URL"))


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data.get("catalog", data)
