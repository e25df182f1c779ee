"""
Utility modules for the catalog admin core
"""
from .config_loader import CatalogConfig, load_catalog_config, use_real_integrations

__all__ = [
    'CatalogConfig',
    'load_catalog_config',
    'use_real_integrations',
]
