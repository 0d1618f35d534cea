"""
Figure builders for the linked map + scatterplot views.

Every render_* call rebuilds its figure from scratch. Selection and hover
styling is then applied in place on the marker arrays, so restyling never
touches geometry. County counts are small (100 for NC) which keeps the
full redraw cheap.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

import plotly.graph_objects as go

from .config import (
    BASE_STROKE, BASE_STROKE_WIDTH, HOVER_STROKE, HOVER_STROKE_WIDTH,
    MAP_HEIGHT, MAP_WIDTH, NEUTRAL_FILL, POINT_FILL, POINT_OPACITY,
    POINT_RADIUS, POINT_SELECTED_FILL, POINT_SELECTED_RADIUS,
    POINT_SELECTED_STROKE, POINT_SELECTED_STROKE_WIDTH, SCATTER_HEIGHT,
    SCATTER_WIDTH, SELECTED_STROKE, SELECTED_STROKE_WIDTH,
)
from .data import Entity
from .details import tooltip_lines
from .scales import ColorMapping, LegendSpec
from .selection import SelectionState

MAP_VIEW = "map"


@dataclass(frozen=True)
class ScatterSpec:
    name: str
    attr: str
    label: str
    tick_prefix: str = ""
    tick_suffix: str = ""
    tick_format: str = ""


SCATTER_SPECS = [
    ScatterSpec("income", "median_income", "Median household income",
                tick_prefix="$", tick_format="~s"),
    ScatterSpec("poverty", "poverty_rate", "Poverty rate (%)", tick_suffix="%"),
    ScatterSpec("education", "ba_plus_pct", "Bachelor's degree or higher (%)", tick_suffix="%"),
]


@dataclass(frozen=True)
class BrushRect:
    """A brush rectangle in data coordinates."""

    x0: float
    x1: float
    y0: float
    y1: float

    @classmethod
    def from_range(cls, range_: Mapping) -> Optional["BrushRect"]:
        """Build from Plotly's selectedData["range"]; None if it is not a box."""
        try:
            (x0, x1), (y0, y1) = range_["x"], range_["y"]
        except (KeyError, TypeError, ValueError):
            return None
        return cls(min(x0, x1), max(x0, x1), min(y0, y1), max(y0, y1))

    @property
    def is_empty(self) -> bool:
        return self.x0 == self.x1 or self.y0 == self.y1

    def contains(self, x: float, y: float) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1


@dataclass(frozen=True)
class Tooltip:
    key: str
    lines: List[str]
    color: str


def _finite(v) -> bool:
    return v is not None and math.isfinite(v)


def fill_value(entity: Entity, layer: str = "depression") -> Optional[float]:
    """Needs index on the needs layer, otherwise the age-adjusted depression rate.

    A county with no needs index returns None on the needs layer so it is
    drawn neutral instead of borrowing a value from the other layer.
    """
    if layer == "needs":
        return entity.needs_index
    return entity.depression_adj


class LinkedViewRenderer:
    """Owns the map and scatter figures and their selection/hover styling."""

    def __init__(self):
        self.map_figure: Optional[go.Figure] = None
        self.scatter_figures: Dict[str, go.Figure] = {}
        self.brush_enabled = False
        self.tooltip: Optional[Tooltip] = None
        self._map_keys: List[str] = []
        self._map_fills: Dict[str, str] = {}
        self._points: Dict[str, List[Tuple[str, float, float]]] = {}
        self._selection = SelectionState.none()
        self._hover_key: Optional[str] = None

    # ----------------------
    # Map
    # ----------------------

    def render_map(self, by_key: Mapping[str, Entity], features: List[dict],
                   geo_key_of: Callable[[dict], str], color: ColorMapping,
                   legend: LegendSpec, layer: str = "depression") -> go.Figure:
        joined, neutral = [], []
        keys, values = [], []
        neutral_ids = []
        for i, f in enumerate(features):
            key = geo_key_of(f)
            entity = by_key.get(key) if key else None
            value = fill_value(entity, layer) if entity is not None else None
            if entity is not None and _finite(value) and key not in keys:
                joined.append({**f, "id": key})
                keys.append(key)
                values.append(value)
            else:
                fid = f"unjoined-{i}"
                neutral.append({**f, "id": fid})
                neutral_ids.append(fid)

        self._map_keys = keys
        self._map_fills = {k: color(v) for k, v in zip(keys, values)}

        fig = go.Figure()
        fig.add_trace(go.Choropleth(
            geojson={"type": "FeatureCollection", "features": joined},
            locations=keys,
            z=values,
            customdata=keys,
            marker_line_color=[BASE_STROKE] * len(keys),
            marker_line_width=[BASE_STROKE_WIDTH] * len(keys),
            colorbar=legend.colorbar(),
            hoverinfo="none",
            name="counties",
            **color.plotly_kwargs(),
        ))
        if neutral:
            fig.add_trace(go.Choropleth(
                geojson={"type": "FeatureCollection", "features": neutral},
                locations=neutral_ids,
                z=[0] * len(neutral_ids),
                colorscale=[[0, NEUTRAL_FILL], [1, NEUTRAL_FILL]],
                showscale=False,
                marker_line_color=BASE_STROKE,
                marker_line_width=BASE_STROKE_WIDTH,
                hoverinfo="none",
                name="no data",
            ))

        fig.update_geos(fitbounds="locations", visible=False, projection_type="mercator")
        fig.update_layout(
            width=MAP_WIDTH,
            height=MAP_HEIGHT,
            margin={"r": 0, "t": 0, "l": 0, "b": 0},
            clickmode="event",
            uirevision="map",
        )
        self.map_figure = fig
        self._style_map()
        return fig

    def _map_stroke(self, key: str) -> Tuple[str, float]:
        if self._selection.contains(key):
            return SELECTED_STROKE, SELECTED_STROKE_WIDTH
        if key == self._hover_key:
            return HOVER_STROKE, HOVER_STROKE_WIDTH
        return BASE_STROKE, BASE_STROKE_WIDTH

    def _style_map(self) -> None:
        if self.map_figure is None or not self.map_figure.data:
            return
        strokes = [self._map_stroke(k) for k in self._map_keys]
        self.map_figure.data[0].marker.line.color = [c for c, _ in strokes]
        self.map_figure.data[0].marker.line.width = [w for _, w in strokes]

    def map_stroke_of(self, key: str) -> Tuple[str, float]:
        """Current (color, width) outline of a county on the map."""
        i = self._map_keys.index(key)
        line = self.map_figure.data[0].marker.line
        return line.color[i], line.width[i]

    def fill_of(self, key: str) -> str:
        return self._map_fills.get(key, NEUTRAL_FILL)

    # ----------------------
    # Scatterplots
    # ----------------------

    def render_scatter(self, entities: List[Entity], spec: ScatterSpec) -> go.Figure:
        points = [
            (e.fips, getattr(e, spec.attr), e.depression_adj)
            for e in entities
            if _finite(getattr(e, spec.attr)) and _finite(e.depression_adj)
        ]
        self._points[spec.name] = points

        fig = go.Figure(go.Scatter(
            x=[x for _, x, _ in points],
            y=[y for _, _, y in points],
            customdata=[k for k, _, _ in points],
            mode="markers",
            opacity=POINT_OPACITY,
            marker=dict(color=POINT_FILL, size=POINT_RADIUS * 2),
            selected=dict(marker=dict(opacity=POINT_OPACITY)),
            unselected=dict(marker=dict(opacity=POINT_OPACITY)),
            hoverinfo="none",
            name=spec.name,
        ))
        fig.update_layout(
            width=SCATTER_WIDTH,
            height=SCATTER_HEIGHT,
            margin={"t": 20, "r": 20, "b": 40, "l": 50},
            showlegend=False,
            clickmode="event",
            uirevision=spec.name,
            plot_bgcolor="white",
            xaxis=dict(title=dict(text=spec.label, font=dict(size=11)), nticks=5,
                       tickprefix=spec.tick_prefix, ticksuffix=spec.tick_suffix,
                       tickformat=spec.tick_format, showline=True, linecolor="#333"),
            yaxis=dict(title=dict(text="Depression (age-adjusted, %)", font=dict(size=11)),
                       nticks=5, ticksuffix="%", showline=True, linecolor="#333"),
        )
        self.scatter_figures[spec.name] = fig
        self._apply_dragmode(fig)
        self._style_scatter(spec.name)
        return fig

    def _style_scatter(self, name: str) -> None:
        fig = self.scatter_figures.get(name)
        if fig is None:
            return
        sel = [self._selection.contains(k) for k, _, _ in self._points[name]]
        fig.data[0].marker.color = [POINT_SELECTED_FILL if s else POINT_FILL for s in sel]
        fig.data[0].marker.line.color = [POINT_SELECTED_STROKE if s else POINT_FILL for s in sel]
        fig.data[0].marker.line.width = [POINT_SELECTED_STROKE_WIDTH if s else 0 for s in sel]
        fig.data[0].marker.size = [
            (POINT_SELECTED_RADIUS if s else POINT_RADIUS) * 2 for s in sel
        ]

    def point_style_of(self, name: str, key: str) -> dict:
        """Current fill, stroke width and radius of a county's point in one scatterplot."""
        keys = [k for k, _, _ in self._points[name]]
        i = keys.index(key)
        marker = self.scatter_figures[name].data[0].marker
        return {"fill": marker.color[i], "stroke_width": marker.line.width[i],
                "radius": marker.size[i] / 2}

    def points_in_rect(self, name: str, rect: BrushRect) -> Set[str]:
        """Keys whose plotted position lies inside the brush rectangle."""
        return {k for k, x, y in self._points.get(name, []) if rect.contains(x, y)}

    def _apply_dragmode(self, fig: go.Figure) -> None:
        if self.brush_enabled:
            fig.update_layout(dragmode="select")
        else:
            fig.update_layout(dragmode=False, selections=[])

    def set_brush_enabled(self, enabled: bool) -> None:
        """Show or hide the brush on every scatterplot at once."""
        self.brush_enabled = enabled
        for fig in self.scatter_figures.values():
            self._apply_dragmode(fig)

    # ----------------------
    # Linked styling
    # ----------------------

    def apply_selection_visuals(self, state: SelectionState) -> None:
        self._selection = state
        self._style_map()
        for name in self.scatter_figures:
            self._style_scatter(name)

    def pointer_enter(self, view: str, entity: Entity) -> Tooltip:
        self.tooltip = Tooltip(entity.fips, tooltip_lines(entity), self.fill_of(entity.fips))
        if view == MAP_VIEW:
            self._hover_key = entity.fips
            self._style_map()
        return self.tooltip

    def pointer_leave(self, view: str) -> None:
        self.tooltip = None
        if view == MAP_VIEW and self._hover_key is not None:
            self._hover_key = None
            self._style_map()
