"""
Config package for table_browser.

Responsible for:
- config models (GlobalConfig, TableConfig, FeatureFlags, ExportSettings)
- config I/O helpers (load_global_config / load_table_registry)
"""

from .model import ExportSettings, FeatureFlags, GlobalConfig, TableConfig
from .loader import load_global_config, load_table_registry

__all__ = [
    "ExportSettings",
    "FeatureFlags",
    "GlobalConfig",
    "TableConfig",
    "load_global_config",
    "load_table_registry",
]
