from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from table_browser.config.loader import load_table_registry
from table_browser.core.pipeline import ViewPipeline
from table_browser.services.export_service import ExportService
from table_browser.services.table_service import TableManager
from table_browser.ui.callbacks.callbacks_export import register_export_callbacks
from table_browser.ui.callbacks.callbacks_render import register_render_callbacks
from table_browser.ui.callbacks.callbacks_state import register_state_callbacks
from table_browser.ui.layout.build_layout import build_layout
from table_browser.validation.dataset_validation import warn_on_invalid_datasets

logger = logging.getLogger(__name__)


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config, cfg_by_name = load_table_registry(config_root)
    if not cfg_by_name:
        raise RuntimeError("No table configs were loaded from config")

    # 2) Initialize Service Layer
    tables = TableManager(cfg_by_name)
    table_names = list(cfg_by_name.keys())

    # 3) Choose Default Table
    default_table = global_config.default_table
    if default_table not in cfg_by_name:
        if default_table is not None:
            logger.warning("default_table %r not configured; falling back to first table", default_table)
        default_table = table_names[0]

    # Load the default eagerly so config problems surface at startup
    warn_on_invalid_datasets([tables[default_table]], logger)

    # 4) Pipeline & Export Services
    pipeline = ViewPipeline()
    export_settings = global_config.export
    export_service = ExportService(
        empty_cell=export_settings.empty_cell,
        respect_search=export_settings.respect_search,
        sheet_name=export_settings.sheet_name,
        pdf_title=export_settings.pdf_title,
        filenames=export_settings.filenames,
        pipeline=pipeline,
    )

    # 5) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        table_names=table_names,
        tables=tables,
        default_table=default_table,
        pipeline=pipeline,
        export_service=export_service,
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )

    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_state_callbacks(app, ctx)
    register_render_callbacks(app, ctx)
    register_export_callbacks(app, ctx)

    return app
