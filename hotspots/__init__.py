"""NC Depression Hotspots: linked choropleth + scatterplot dashboard."""

__version__ = "0.1.0"
