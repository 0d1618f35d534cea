"""
Dash callback wiring.

Each setup step checks that its components are in the layout and quietly
skips itself when they are not, so a page without (say) the region buttons
still works. Event translation lives in dispatch_event/dispatch_hover so it
can be exercised without a running server.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

import dash
from dash import Input, Output, Patch, State, no_update
from dash.exceptions import PreventUpdate

from .config import DEFAULT_WEIGHT
from .figures import MAP_VIEW, BrushRect
from .interactions import SCATTER_VIEWS, Dashboard
from .layout import (
    REGION_BUTTONS, mode_button_styles, render_detail, render_tooltip,
    scatter_panel_styles,
)
from .needs_index import VARIABLES, weights_from_controls

logger = logging.getLogger(__name__)

SCATTER_IDS = [f"scatter-{name}" for name in SCATTER_VIEWS]
GRAPH_IDS = ["map", *SCATTER_IDS]
DETAIL_IDS = {"map-county-title", "map-county-details"}
MODE_IDS = {"mode-individual", "mode-cluster"}
NEEDS_IDS = {"apply-needs", "reset-needs",
             *(f"var-{v}" for v in VARIABLES), *(f"w-{v}" for v in VARIABLES)}


# ======================
# Event translation
# ======================

def _view_of(component_id: str) -> str:
    return MAP_VIEW if component_id == "map" else component_id[len("scatter-"):]


def point_key(data: Optional[dict], view: str) -> Optional[str]:
    """County key of the first point in Plotly click/hover data."""
    if not data or not data.get("points"):
        return None
    point = data["points"][0]
    key = point.get("location") if view == MAP_VIEW else point.get("customdata")
    if isinstance(key, list):
        key = key[0] if key else None
    return key


def dispatch_event(dashboard: Dashboard, trigger: str, prop: str,
                   values: Dict[str, Any]) -> None:
    """
    Translate one triggered component property into a Dashboard event.

    ``values`` maps "component.property" to the callback's current value.
    """
    value = values.get(f"{trigger}.{prop}")

    if trigger in GRAPH_IDS and prop == "clickData":
        view = _view_of(trigger)
        dashboard.click(view, point_key(value, view))
        return

    if trigger in SCATTER_IDS and prop == "selectedData":
        # Dash only reports the finished box, so the drag arrives as one frame
        view = _view_of(trigger)
        rect = BrushRect.from_range(value.get("range")) if value else None
        dashboard.drag_start(view)
        if rect is not None:
            dashboard.drag_move(view, rect)
        dashboard.drag_end(view, rect)
        return

    if trigger in MODE_IDS:
        dashboard.control_changed("mode", trigger[len("mode-"):])
        return

    if trigger.startswith("region-"):
        region = trigger[len("region-"):]
        if region == "clear":
            dashboard.control_changed("clear")
        else:
            dashboard.control_changed("region", region)
        return

    if trigger == "apply-needs":
        enabled = {v: bool(values.get(f"var-{v}.value")) for v in VARIABLES}
        raw = {v: values.get(f"w-{v}.value") for v in VARIABLES}
        dashboard.apply_needs_index(weights_from_controls(enabled, raw))
        return

    if trigger == "reset-needs":
        dashboard.reset_needs_index()
        return

    if trigger == "scatter-tabs":
        dashboard.control_changed("scatter_tab", value)
        return

    raise PreventUpdate


def dispatch_hover(dashboard: Dashboard, trigger: str, data: Optional[dict]):
    """Enter or leave hover on a view; returns the tooltip (or None)."""
    view = _view_of(trigger)
    key = point_key(data, view)
    if key is None:
        dashboard.pointer_leave(view)
        return None
    return dashboard.pointer_enter(view, key)


def _triggered() -> tuple:
    ctx = dash.callback_context
    if not ctx.triggered:
        raise PreventUpdate
    trigger, prop = ctx.triggered[0]["prop_id"].split(".", 1)
    return trigger, prop


# ======================
# Callback setup
# ======================

def _register_selection_core(app: dash.Dash, dashboard: Dashboard, ids: Set[str]) -> None:
    if not set(GRAPH_IDS) <= ids:
        logger.warning("Map or scatterplot targets missing; selection callbacks skipped")
        return

    has_details = DETAIL_IDS <= ids
    has_mode = MODE_IDS <= ids
    has_needs = NEEDS_IDS <= ids

    outputs = [Output(g, "figure") for g in GRAPH_IDS]
    if has_details:
        outputs += [Output("map-county-title", "children"),
                    Output("map-county-details", "children")]
    if has_mode:
        outputs += [Output("mode-individual", "style"), Output("mode-cluster", "style")]

    inputs = [Input("map", "clickData")]
    for sid in SCATTER_IDS:
        inputs += [Input(sid, "clickData"), Input(sid, "selectedData")]
    if has_mode:
        inputs += [Input("mode-individual", "n_clicks"), Input("mode-cluster", "n_clicks")]
    inputs += [Input(cid, "n_clicks") for cid, _ in REGION_BUTTONS if cid in ids]
    if "scatter-tabs" in ids:
        inputs.append(Input("scatter-tabs", "value"))

    states: List[State] = []
    if has_needs:
        inputs += [Input("apply-needs", "n_clicks"), Input("reset-needs", "n_clicks")]
        states += [State(f"var-{v}", "value") for v in VARIABLES]
        states += [State(f"w-{v}", "value") for v in VARIABLES]

    names = [f"{d.component_id}.{d.component_property}" for d in inputs + states]

    @app.callback(output=outputs, inputs=inputs, state=states, prevent_initial_call=True)
    def on_interaction(*args):
        trigger, prop = _triggered()
        dispatch_event(dashboard, trigger, prop, dict(zip(names, args)))

        renderer = dashboard.renderer
        result = [renderer.map_figure] + [renderer.scatter_figures[n] for n in SCATTER_VIEWS]
        if has_details:
            result += [dashboard.detail.title, render_detail(dashboard.detail)]
        if has_mode:
            result += list(mode_button_styles(dashboard.store.mode.value))
        return result


def _register_hover(app: dash.Dash, dashboard: Dashboard, ids: Set[str]) -> None:
    if "tooltip" not in ids or "map" not in ids:
        return
    graphs = [g for g in GRAPH_IDS if g in ids]

    @app.callback(
        Output("tooltip", "children"),
        Output("tooltip", "style"),
        Output("map", "figure", allow_duplicate=True),
        [Input(g, "hoverData") for g in graphs],
        prevent_initial_call=True,
    )
    def on_hover(*hover_data):
        trigger, _ = _triggered()
        tooltip = dispatch_hover(dashboard, trigger, hover_data[graphs.index(trigger)])
        children, style = render_tooltip(tooltip)

        if trigger != "map":
            return children, style, no_update
        line = dashboard.renderer.map_figure.data[0].marker.line
        patched = Patch()
        patched["data"][0]["marker"]["line"]["color"] = list(line.color)
        patched["data"][0]["marker"]["line"]["width"] = list(line.width)
        return children, style, patched


def _register_needs_controls(app: dash.Dash, ids: Set[str]) -> None:
    if not NEEDS_IDS <= ids:
        return

    @app.callback(
        [Output(f"var-{v}", "value") for v in VARIABLES]
        + [Output(f"w-{v}", "value") for v in VARIABLES],
        Input("reset-needs", "n_clicks"),
        prevent_initial_call=True,
    )
    def reset_controls(_n_clicks):
        return [["on"]] * len(VARIABLES) + [DEFAULT_WEIGHT] * len(VARIABLES)


def _register_tabs(app: dash.Dash, ids: Set[str]) -> None:
    panel_ids = [f"panel-{sid}" for sid in SCATTER_IDS]
    if "scatter-tabs" in ids and set(panel_ids) <= ids:
        @app.callback([Output(p, "style") for p in panel_ids], Input("scatter-tabs", "value"))
        def show_scatter(tab):
            return scatter_panel_styles(tab)

    if {"sidebar-tabs", "panel-formula", "panel-graphs"} <= ids:
        @app.callback(
            Output("panel-formula", "style"),
            Output("panel-graphs", "style"),
            Input("sidebar-tabs", "value"),
        )
        def show_sidebar_panel(tab):
            if tab == "formula":
                return {"display": "block"}, {"display": "none"}
            return {"display": "none"}, {"display": "block"}


def register_callbacks(app: dash.Dash, dashboard: Dashboard, ids: Set[str]) -> None:
    """Wire all Dash callbacks whose components exist in the layout."""
    _register_selection_core(app, dashboard, ids)
    _register_hover(app, dashboard, ids)
    _register_needs_controls(app, ids)
    _register_tabs(app, ids)
