from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Mapping, Optional

from table_browser.config.model import TableConfig
from table_browser.core.dataset import Dataset
from table_browser.core.exceptions import ConfigError
from table_browser.core.table_loader import from_config

logger = logging.getLogger(__name__)


class TableManager(Mapping[str, Dataset]):
    """
    Name -> Dataset mapping that reads each table on first access.

    Tables live in memory for the lifetime of the process; deletions mutate
    the cached Dataset until `reload` swaps it for a fresh copy.
    """

    def __init__(self, cfg_by_name: Dict[str, TableConfig]):
        self._configs = dict(cfg_by_name)
        self._cache: Dict[str, Dataset] = {}

    # -------------------------------------------------------------------------
    # Mapping interface
    # -------------------------------------------------------------------------
    def __getitem__(self, name: str) -> Dataset:
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        ds = self._load(self.config_for(name))
        self._cache[name] = ds
        return ds

    def __iter__(self) -> Iterator[str]:
        return iter(self._configs)

    def __len__(self) -> int:
        return len(self._configs)

    def get(self, name: str, default: Optional[Dataset] = None) -> Optional[Dataset]:
        try:
            return self[name]
        except KeyError:
            return default

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def config_for(self, name: str) -> TableConfig:
        try:
            return self._configs[name]
        except KeyError:
            raise KeyError(f"Unknown table '{name}'") from None

    def is_loaded(self, name: str) -> bool:
        return name in self._cache

    def loaded_names(self) -> List[str]:
        return [name for name in self._configs if name in self._cache]

    def reload(self, name: str) -> Dataset:
        """
        Replace a table with a fresh copy read from its config (undoes deletions).

        The new Dataset gets a new uid, so views cached for the old one are
        never served again.
        """
        old = self._cache.pop(name, None)
        ds = self[name]
        logger.info(
            "Reloaded table",
            extra={
                "table": name,
                "rows_before": old.row_count() if old is not None else None,
                "rows_after": ds.row_count(),
            },
        )
        return ds

    @staticmethod
    def _load(cfg: TableConfig) -> Dataset:
        logger.info("Loading table", extra={"table": cfg.name, "file": str(cfg.file or "")})
        try:
            return from_config(cfg)
        except ConfigError as e:
            logger.error("Table config error on load", extra={"table": cfg.name, "error": str(e)})
            raise
        except Exception:
            logger.exception("Unexpected error while loading table", extra={"table": cfg.name})
            raise
