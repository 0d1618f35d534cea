"""
Configuration for the NC Depression Hotspots dashboard.
- Data paths (overridable from the environment)
- Geographic key constants
- Visual styles shared by the map and scatterplots
"""

from __future__ import annotations

import logging
import os
from pathlib import Path


# ======================
# Config / Paths
# ======================

CSV_PATH     = Path(os.environ.get("HOTSPOTS_CSV", "data/NC_County_Data.csv"))
GEOJSON_PATH = Path(os.environ.get("HOTSPOTS_GEOJSON", "data/nc-counties.geojson"))

HOST  = os.environ.get("HOTSPOTS_HOST", "127.0.0.1")
PORT  = int(os.environ.get("HOTSPOTS_PORT", "8050"))
DEBUG = os.environ.get("HOTSPOTS_DEBUG", "1").lower() in ("1", "true", "yes")


# ======================
# Geo keys
# ======================

STATE_FIPS = "37"  # North Carolina
COUNTY_KEY_WIDTH = 5
COUNTY_CODE_WIDTH = 3


# ======================
# Styles
# ======================

MAP_WIDTH = 800
MAP_HEIGHT = 600
SCATTER_WIDTH = 360
SCATTER_HEIGHT = 260

COLOR_SCHEME = "Reds"
NEUTRAL_FILL = "#f5f5f5"

BASE_STROKE = "#fff"
BASE_STROKE_WIDTH = 0.5
HOVER_STROKE = "#333"
HOVER_STROKE_WIDTH = 2
SELECTED_STROKE = "#000"
SELECTED_STROKE_WIDTH = 3

POINT_FILL = "#3182bd"
POINT_SELECTED_FILL = "#dc2626"
POINT_SELECTED_STROKE = "#000"
POINT_SELECTED_STROKE_WIDTH = 1.5
POINT_RADIUS = 4
POINT_SELECTED_RADIUS = 6
POINT_OPACITY = 0.8

ACTIVE_BUTTON = {"background": "#3182bd", "color": "white"}
INACTIVE_BUTTON = {"background": "white", "color": "black"}

DEFAULT_WEIGHT = 25

DEPRESSION_LEGEND_TITLE = "Depression Rate (age-adjusted %)"
NEEDS_LEGEND_TITLE = "Needs Index (0-10)"
LEGEND_TICKS = 5


def configure_logging(level: int = logging.INFO) -> None:
    """Set up root logging for the dashboard process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
