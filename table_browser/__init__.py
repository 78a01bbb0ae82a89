"""
Top-level package for the table browser.

This package exposes the core architecture (dataset, view pipeline, exports, UI adapters).
Most code should import from submodules such as:
    table_browser.core
    table_browser.services
    table_browser.ui
"""

__all__: list[str] = []
