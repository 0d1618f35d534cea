"""Convert the Census county shapefile to the NC counties GeoJSON used by the dashboard."""

import sys
from pathlib import Path

import geopandas as gpd

from hotspots.config import GEOJSON_PATH, STATE_FIPS

# Path to your shapefile folder
shp_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("data/tl_2023_us_county.shp")

gdf = gpd.read_file(shp_path)
print("Columns:", gdf.columns.tolist())

# STATEFP == '37' is North Carolina in US Census shapefiles
nc = gdf[gdf["STATEFP"] == STATE_FIPS]

# Plotly/shapely expect lon/lat
nc = nc.to_crs(epsg=4326)[["GEOID", "NAME", "COUNTYFP", "geometry"]]

GEOJSON_PATH.parent.mkdir(parents=True, exist_ok=True)
nc.to_file(GEOJSON_PATH, driver="GeoJSON")

print(f"Saved {len(nc)} North Carolina counties to {GEOJSON_PATH}")
