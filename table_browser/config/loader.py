from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from table_browser.config.model import (
    ExportSettings,
    FeatureFlags,
    GlobalConfig,
    TableConfig,
)
from table_browser.core.exceptions import ConfigError
from table_browser.core.view_state import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS

logger = logging.getLogger(__name__)


def load_global_config(root: Path) -> GlobalConfig:
    """
    Load configuration from a directory using the multi-file layout.

    Expected structure:

        root/
            global.json
            tables/
                people.json
                inventory.json
                ...

    Each file in 'tables/' is parsed into a TableConfig. The resulting GlobalConfig includes:

    - ui_title: title for UI, defaults to 'Table Browser'
    - default_table: table shown on start, defaults to the first table
    - default_page_size / page_size_options: pagination controls
    - features: FeatureFlags gating each control
    - export: ExportSettings (empty-cell policy, file names, sheet/PDF titles)
    - tables: list of TableConfigs

    :param root: Directory containing 'global.json' and optionally 'tables/'.
    :return: A GlobalConfig instance.
    :raises FileNotFoundError: if global.json does not exist.
    :raises ConfigError: if a config file is not valid JSON or has invalid values.
    """
    root = Path(root)
    logger.info(
        "Loading global config",
        extra={"config_root": str(root)},
    )

    global_path = root / "global.json"
    if not global_path.is_file():
        raise FileNotFoundError(f"File not found at {global_path}")

    raw_global = _read_json(global_path)

    tables_dir = root / "tables"
    tables: List[TableConfig] = []

    if tables_dir.is_dir():
        files = sorted(tables_dir.glob("*.json"))
        if not files:
            logger.warning("No .json files found in %s", tables_dir)

        for idx, config_file in enumerate(files):
            raw = _read_json(config_file)
            tables.append(TableConfig.from_raw(raw, source_path=config_file, index=idx))
    else:
        logger.warning("Tables directory not found at: %s", tables_dir)

    try:
        page_size_options = [int(v) for v in raw_global.get("page_size_options", PAGE_SIZE_OPTIONS)]
        default_page_size = int(raw_global.get("default_page_size", DEFAULT_PAGE_SIZE))
        export = ExportSettings.from_dict(raw_global.get("export"))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in {global_path}: {e}") from e

    if default_page_size < 1 or any(v < 1 for v in page_size_options):
        raise ConfigError(f"Page sizes must be positive in {global_path}")
    if default_page_size not in page_size_options:
        page_size_options = sorted(set(page_size_options) | {default_page_size})

    return GlobalConfig(
        ui_title=raw_global.get("ui_title", "Table Browser"),
        default_table=raw_global.get("default_table"),
        default_page_size=default_page_size,
        page_size_options=page_size_options,
        features=FeatureFlags.from_dict(raw_global.get("features")),
        export=export,
        tables=tables,
    )


def load_table_registry(root: Path) -> Tuple[GlobalConfig, Dict[str, TableConfig]]:
    """
    Load global config + table config objects only (no table data is read).
    Returns mapping of table name -> TableConfig.
    """
    global_config = load_global_config(root)

    cfg_by_name: Dict[str, TableConfig] = {}
    for cfg in global_config.tables:
        if cfg.name in cfg_by_name:
            raise ConfigError(f"Duplicate table name '{cfg.name}' in {cfg.source_path}")
        cfg_by_name[cfg.name] = cfg

    logger.info("Loaded %d table config(s)", len(cfg_by_name))
    return global_config, cfg_by_name


def _read_json(path: Path) -> dict:
    try:
        with path.open() as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object in {path}")
    return raw
