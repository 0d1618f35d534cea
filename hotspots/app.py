"""
NC Depression Hotspots dashboard (app factory).
- County CSV: data/NC_County_Data.csv
- County boundaries: data/nc-counties.geojson
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

import dash

from .callbacks import register_callbacks
from .config import CSV_PATH, DEBUG, GEOJSON_PATH, HOST, PORT, configure_logging
from .data import (
    DataLoadError, build_entities, index_entities, join_report, load_county_rows,
    load_geojson,
)
from .interactions import Dashboard
from .layout import build_blank_layout, build_layout, component_ids

logger = logging.getLogger(__name__)


def load_dashboard(csv_path: Path = CSV_PATH,
                   geojson_path: Path = GEOJSON_PATH) -> Dashboard:
    """Load both inputs, join them and build the initial figures."""
    features = load_geojson(geojson_path)
    entities = build_entities(load_county_rows(csv_path))
    join_report(index_entities(entities), features)
    return Dashboard(entities, features)


def create_app(csv_path: Path = CSV_PATH,
               geojson_path: Path = GEOJSON_PATH,
               **layout_options) -> dash.Dash:
    """
    App factory. Loads data, builds layout, and registers callbacks.

    If either input fails to load the page stays blank apart from a short
    message; the error goes to the log.
    """
    app, _ = create_app_with_dashboard(csv_path, geojson_path, **layout_options)
    return app


def create_app_with_dashboard(csv_path: Path = CSV_PATH,
                              geojson_path: Path = GEOJSON_PATH,
                              **layout_options) -> Tuple[dash.Dash, Optional[Dashboard]]:
    app = dash.Dash(__name__)
    app.title = "NC Depression Hotspots"

    try:
        dashboard = load_dashboard(csv_path, geojson_path)
    except DataLoadError as exc:
        logger.error("Error loading data or geojson: %s", exc)
        app.layout = build_blank_layout("Data could not be loaded. See the server log for details.")
        return app, None

    app.layout = build_layout(dashboard, **layout_options)
    register_callbacks(app, dashboard, component_ids(app.layout))
    return app, dashboard


# ======================
# Main
# ======================

def main() -> None:
    configure_logging()
    app = create_app()
    app.run(host=HOST, port=PORT, debug=DEBUG)


if __name__ == "__main__":
    main()
