from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from table_browser.core.view_state import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from table_browser.export.model import DEFAULT_FILENAMES, EmptyCellPolicy, ExportFormat


@dataclass(frozen=True)
class FeatureFlags:
    """
    Which controls the table exposes.

    Flags only gate controls (and the derived computations behind them); they
    never change how rows are ordered or filtered.
    """
    search_bar: bool = True
    pagination: bool = True
    page_size_control: bool = True
    column_visibility: bool = True
    removable_rows: bool = True
    row_copy: bool = True
    csv_export: bool = True
    excel_export: bool = True
    pdf_export: bool = True
    table_reload: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> FeatureFlags:
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in known})


@dataclass(frozen=True)
class ExportSettings:
    empty_cell: EmptyCellPolicy = field(default_factory=EmptyCellPolicy)
    respect_search: bool = False
    sheet_name: str = "Sheet1"
    pdf_title: str = "Table export"
    filenames: Dict[ExportFormat, str] = field(default_factory=lambda: dict(DEFAULT_FILENAMES))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ExportSettings:
        data = data or {}
        filenames = dict(DEFAULT_FILENAMES)
        for fmt, name in (data.get("filenames") or {}).items():
            filenames[ExportFormat(fmt)] = str(name)
        return cls(
            empty_cell=EmptyCellPolicy.from_dict(data),
            respect_search=bool(data.get("respect_search", False)),
            sheet_name=str(data.get("sheet_name", "Sheet1")),
            pdf_title=str(data.get("pdf_title", "Table export")),
            filenames=filenames,
        )


@dataclass
class TableConfig:
    """
    Parsed config entry for a single table.
    """
    raw: Dict[str, Any]
    source_path: Path
    index: int

    @property
    def name(self) -> str:
        return self.raw.get("name", f"Table {self.index}")

    @property
    def file(self) -> Optional[Path]:
        """CSV source, resolved against the directory of the config file."""
        raw_file = self.raw.get("file")
        if not raw_file:
            return None
        path = Path(raw_file)
        if path.is_absolute():
            return path
        return (self.source_path.parent / path).resolve()

    @property
    def columns(self) -> Dict[str, Any]:
        return self.raw.get("columns", {})

    @property
    def decorators(self) -> Dict[str, Any]:
        return self.raw.get("decorators", {})

    @classmethod
    def from_raw(cls, raw: Dict[str, Any], source_path: Path, index: int) -> TableConfig:
        return cls(raw=raw, source_path=source_path, index=index)


@dataclass
class GlobalConfig:
    ui_title: str = "Table Browser"
    default_table: Optional[str] = None
    default_page_size: int = DEFAULT_PAGE_SIZE
    page_size_options: List[int] = field(default_factory=lambda: list(PAGE_SIZE_OPTIONS))
    features: FeatureFlags = field(default_factory=FeatureFlags)
    export: ExportSettings = field(default_factory=ExportSettings)
    tables: List[TableConfig] = field(default_factory=list)
