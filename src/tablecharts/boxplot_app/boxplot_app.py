"""Boxplot app: standalone NiceGUI application for BoxplotPanel.

Runs in native or web mode via env vars. Uses @ui.page("/") pattern.

Run:
    python -m tablecharts.boxplot_app.boxplot_app

Env vars:
    TABLECHARTS_CSV: results table to open (default: last opened, else sample data)
    TABLECHARTS_GUI_NATIVE: 1/0 (default 1)
    TABLECHARTS_GUI_RELOAD: 1/0 (default 0)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import multiprocessing as mp
import os
from multiprocessing import freeze_support
from pathlib import Path
from typing import Optional

from nicegui import ui

from tablecharts.boxplot.tabular_source import DataFrameSource
from tablecharts.boxplot_app.boxplot_panel import BoxplotPanel
from tablecharts.boxplot_app.sample_data import sample_results_table
from tablecharts.chart_config import ChartConfig
from tablecharts.utils.gui_defaults import setUpGuiDefaults
from tablecharts.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

CSV_ENV = "TABLECHARTS_CSV"


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_csv_path(config: Optional[ChartConfig]) -> Optional[Path]:
    """CSV to open: TABLECHARTS_CSV, else the last opened file if it still exists."""
    raw = os.getenv(CSV_ENV)
    if raw:
        return Path(raw)
    if config is not None and config.get_last_csv():
        last = Path(config.get_last_csv())
        if last.exists():
            return last
    return None


def load_source(config: Optional[ChartConfig]) -> DataFrameSource:
    """Open the resolved CSV, or the bundled sample table when there is none."""
    path = resolve_csv_path(config)
    if path is None:
        logger.info("No CSV given, using sample results table")
        return DataFrameSource(sample_results_table())
    source = DataFrameSource.from_csv(path)
    if config is not None:
        config.set_last_csv(path.resolve())
    return source


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: BoxplotPanel on the resolved results table."""
    setUpGuiDefaults('text-xs')
    ui.page_title("Table Charts")

    with ui.column().classes("w-full h-screen flex flex-col gap-4 p-4"):
        main_container = ui.column().classes("w-full flex-1 min-h-0 overflow-auto")
        config = ChartConfig.load()
        try:
            source = load_source(config)
            BoxplotPanel(source, config=config).build(container=main_container)
        except FileNotFoundError as e:
            with main_container:
                ui.label(str(e)).classes("text-negative")
        except Exception as e:
            logger.exception("Failed to load results table: %s", e)
            with main_container:
                ui.label(f"Failed to load: {e}").classes("text-negative")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the table charts application.

    Env vars (used when arg is None):
      - TABLECHARTS_GUI_NATIVE: 1/0
      - TABLECHARTS_GUI_RELOAD: 1/0
      - HOST: bind host
      - PORT: bind port
    """
    native_bool = _env_bool("TABLECHARTS_GUI_NATIVE", True) if native_bool is None else native_bool
    reload = _env_bool("TABLECHARTS_GUI_RELOAD", False) if reload is None else reload

    from nicegui import native as native_module
    if native_bool:
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting Table Charts app: port=%s reload=%s native=%s",
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "title": "Table Charts",
    }
    if native_bool:
        run_kwargs["window_size"] = (1200, 800)
    ui.run(**run_kwargs)


if __name__ == "__main__":
    freeze_support()
    configure_logging(level="DEBUG")
    if mp.current_process().name == "MainProcess":
        main()
    else:
        logger.debug("Skipping GUI startup in worker process: %s", mp.current_process().name)
