from __future__ import annotations

import logging
from typing import Any, Dict

import pandas as pd

from table_browser.config.model import TableConfig
from table_browser.core.dataset import Dataset
from table_browser.core.decorators import ColumnDecorator, build_decorator
from table_browser.core.exceptions import ConfigError

logger = logging.getLogger(__name__)


class TableConfigError(ConfigError):
    """
    Raised when a table config is structurally invalid for loading.
    """
    pass


def _build_decorators(cfg: TableConfig) -> Dict[str, ColumnDecorator]:
    """
    Resolve the 'decorators' block. Each entry is either a decorator name or
    {"name": ..., "options": {...}}.
    """
    decorators: Dict[str, ColumnDecorator] = {}
    for column_id, spec in cfg.decorators.items():
        if isinstance(spec, str):
            name, options = spec, {}
        elif isinstance(spec, dict) and "name" in spec:
            name, options = spec["name"], spec.get("options") or {}
        else:
            raise TableConfigError(f"Table '{cfg.name}': invalid decorator spec for '{column_id}': {spec!r}")

        try:
            decorators[column_id] = build_decorator(name, options)
        except (KeyError, TypeError) as e:
            msg = f"Table '{cfg.name}': cannot build decorator '{name}' for column '{column_id}': {e}"
            logger.error(msg, extra={"table": cfg.name, "column": column_id})
            raise TableConfigError(msg) from e
    return decorators


def from_config(cfg: TableConfig) -> Dataset:
    """
    Materialise a Dataset from a TableConfig.

    Data comes from the inline 'columns' block, or from a CSV 'file' when given.
    """
    decorators = _build_decorators(cfg)

    path = cfg.file
    if path is not None:
        if not path.is_file():
            raise TableConfigError(f"Table file not found at {path}.")
        logger.info("Reading table from CSV", extra={"table": cfg.name, "path": str(path)})
        df = pd.read_csv(path)
        ds = Dataset.from_frame(df, name=cfg.name, decorators=decorators)
    else:
        columns: Dict[str, Any] = cfg.columns
        if not columns:
            raise TableConfigError(f"Table '{cfg.name}' defines neither 'file' nor 'columns'.")
        ds = Dataset.from_records(columns, name=cfg.name, decorators=decorators)

    unknown = set(decorators) - set(ds.column_ids)
    if unknown:
        logger.warning(
            "Decorators configured for unknown columns %s in table '%s'",
            sorted(unknown),
            cfg.name,
        )
    return ds
