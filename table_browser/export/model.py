from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.cells import CellValue, cell_text


class ExportFormat(str, Enum):
    CSV = "csv"
    XLSX = "xlsx"
    PDF = "pdf"
    CLIPBOARD = "clipboard"


CONTENT_TYPES: Dict[ExportFormat, str] = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ExportFormat.PDF: "application/pdf",
    ExportFormat.CLIPBOARD: "text/plain",
}

DEFAULT_FILENAMES: Dict[ExportFormat, str] = {
    ExportFormat.CSV: "data.csv",
    ExportFormat.XLSX: "data.xlsx",
    ExportFormat.PDF: "data.pdf",
}


@dataclass(frozen=True)
class EmptyCellPolicy:
    """
    Single convention for empty cells, shared by every sink.

    - placeholder: text written in place of an empty cell
    - falsy_is_empty: if True, any falsy value (0, False) also counts as empty
    """
    placeholder: str = ""
    falsy_is_empty: bool = False

    def is_empty(self, value: Any) -> bool:
        if value is None or value == "":
            return True
        return self.falsy_is_empty and not value

    def format(self, value: CellValue) -> str:
        if self.is_empty(value):
            return self.placeholder
        return cell_text(value)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> EmptyCellPolicy:
        data = data or {}
        return cls(
            placeholder=str(data.get("placeholder", "")),
            falsy_is_empty=bool(data.get("falsy_is_empty", False)),
        )


@dataclass(frozen=True)
class ExportedTable:
    """
    Export payload as handed to the host download/clipboard mechanism.
    """
    format: ExportFormat
    filename: Optional[str]
    content: Any            # str for csv/clipboard, bytes for xlsx/pdf
    content_type: str       # e.g. "text/csv"
    row_count: int

    @property
    def is_binary(self) -> bool:
        return isinstance(self.content, (bytes, bytearray))
