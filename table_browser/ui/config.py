from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

from table_browser.config.model import GlobalConfig
from table_browser.core.dataset import Dataset
from table_browser.core.pipeline import ViewPipeline
from table_browser.services.export_service import ExportService
from table_browser.services.table_service import TableManager


@dataclass
class AppConfig:
    config_root: Path
    global_config: GlobalConfig
    table_names: List[str] = field(default_factory=list)
    tables: Mapping[str, Dataset] = field(default_factory=dict)
    default_table: Optional[str] = None

    pipeline: ViewPipeline = field(default_factory=ViewPipeline)
    export_service: Optional[ExportService] = None

    @property
    def features(self):
        return self.global_config.features

    def get_table(self, name: Optional[str]) -> Optional[Dataset]:
        if not name:
            return None
        return self.tables.get(name)

    def reload_table(self, name: str) -> Optional[Dataset]:
        if not isinstance(self.tables, TableManager):
            return self.tables.get(name)
        ds = self.tables.reload(name)
        # views of the replaced Dataset can never be hit again
        self.pipeline.clear()
        return ds

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.export_service is None:
            raise RuntimeError("AppConfig.export_service must be initialized.")
        if not self.table_names:
            raise RuntimeError("AppConfig.table_names must not be empty.")
