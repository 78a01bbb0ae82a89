"""
Core domain layer: dataset abstraction, view state, the sort/filter/paginate
pipeline and row mutation
"""

from .dataset import Column, Dataset, Row
from .view_state import SortConfig, SortDirection, ViewState
from .pipeline import DerivedView, ViewPipeline, derive_view
from .mutation import delete_selected

__all__ = [
    "Column",
    "Dataset",
    "Row",
    "SortConfig",
    "SortDirection",
    "ViewState",
    "DerivedView",
    "ViewPipeline",
    "derive_view",
    "delete_selected",
]
