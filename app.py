"""
NC Depression Hotspots Dashboard
- CSV: data/NC_County_Data.csv (override with HOTSPOTS_CSV)
- GeoJSON: data/nc-counties.geojson (override with HOTSPOTS_GEOJSON)
"""

from hotspots.app import create_app
from hotspots.config import DEBUG, HOST, PORT, configure_logging

configure_logging()
app = create_app()
server = app.server


if __name__ == "__main__":
    app.run(host=HOST, port=PORT, debug=DEBUG)
