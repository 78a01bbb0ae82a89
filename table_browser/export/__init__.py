"""
Export payload types shared by the export service and the UI.
"""

from .model import EmptyCellPolicy, ExportedTable, ExportFormat

__all__ = ["EmptyCellPolicy", "ExportedTable", "ExportFormat"]
