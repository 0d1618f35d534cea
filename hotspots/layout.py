"""Static Dash layout for the hotspots dashboard."""

from __future__ import annotations

from typing import Iterable, List, Set

from dash import dcc, html

from .config import ACTIVE_BUTTON, DEFAULT_WEIGHT, INACTIVE_BUTTON
from .details import DetailRecord
from .interactions import SCATTER_VIEWS, Dashboard
from .needs_index import VARIABLES

CARD = {"background": "#fff", "borderRadius": "10px", "boxShadow": "0 2px 12px #0001",
        "padding": "14px 10px", "marginBottom": "12px"}
BUTTON = {"padding": "6px 10px", "border": "1px solid #ccc", "cursor": "pointer",
          "marginRight": "6px"}
TOOLTIP_HIDDEN = {"display": "none"}

VARIABLE_LABELS = {
    "income": "Median income",
    "education": "Bachelor's degree or higher",
    "depression": "Depression rate",
    "poverty": "Poverty rate",
}
TAB_LABELS = {"income": "Income", "poverty": "Poverty", "education": "Education"}
REGION_BUTTONS = [
    ("region-west", "Select West"),
    ("region-central", "Select Central"),
    ("region-east", "Select East"),
    ("region-all", "Select All"),
    ("region-clear", "Clear Selection"),
]


def mode_button_styles(mode: str):
    """(individual, cluster) button styles for the active mode."""
    if mode == "individual":
        return {**BUTTON, **ACTIVE_BUTTON}, {**BUTTON, **INACTIVE_BUTTON}
    return {**BUTTON, **INACTIVE_BUTTON}, {**BUTTON, **ACTIVE_BUTTON}


def render_detail(record: DetailRecord) -> List:
    """Detail panel children: one paragraph per field, with an info hint."""
    if record.is_empty:
        return [html.P(record.placeholder, style={"color": "#6b7280"})]
    return [
        html.P([
            html.Strong(f"{f.label}:"), f" {f.value} ",
            html.Span("i", className="info-icon", title=f.info, style={"marginLeft": "4px"}),
        ])
        for f in record.fields
    ]


def render_tooltip(tooltip):
    if tooltip is None:
        return [], TOOLTIP_HIDDEN
    title, *rest = tooltip.lines
    children = [html.Strong(title)]
    for line in rest:
        children += [html.Br(), line]
    style = {"display": "block", "borderLeft": f"6px solid {tooltip.color}",
             "padding": "6px 10px", "background": "#fff", "boxShadow": "0 1px 4px #0002",
             "fontSize": "13px"}
    return children, style


def scatter_panel_styles(active: str):
    return [{"display": "block"} if name == active else {"display": "none"}
            for name in SCATTER_VIEWS]


def component_ids(component) -> Set[str]:
    """Every component id in a layout tree."""
    ids = set()
    stack = [component]
    while stack:
        node = stack.pop()
        if isinstance(node, (list, tuple)):
            stack.extend(node)
            continue
        cid = getattr(node, "id", None)
        if isinstance(cid, str):
            ids.add(cid)
        children = getattr(node, "children", None)
        if children is not None and not isinstance(children, str):
            stack.append(children)
    return ids


def _formula_panel() -> html.Div:
    rows = []
    for var in VARIABLES:
        rows.append(html.Div([
            dcc.Checklist(
                id=f"var-{var}",
                options=[{"label": f" {VARIABLE_LABELS[var]}", "value": "on"}],
                value=["on"],
                style={"display": "inline-block", "width": 240},
            ),
            dcc.Input(id=f"w-{var}", type="number", min=0, max=100, step=1,
                      value=DEFAULT_WEIGHT, style={"width": 70}),
        ], style={"marginBottom": "6px"}))
    return html.Div([
        html.H4("Needs Index formula"),
        html.P("Pick variables and weights; income and education count as need when low.",
               style={"fontSize": "13px", "color": "#4b5563"}),
        *rows,
        html.Button("Apply", id="apply-needs", n_clicks=0, style=BUTTON),
        html.Button("Reset", id="reset-needs", n_clicks=0, style=BUTTON),
    ], id="panel-formula", style={"display": "none"})


def _graphs_panel(dashboard: Dashboard) -> html.Div:
    panels = [
        html.Div(
            dcc.Graph(id=f"scatter-{name}", figure=dashboard.renderer.scatter_figures[name],
                      clear_on_unhover=True,
                      config={"modeBarButtonsToRemove": ["lasso2d"], "displaylogo": False}),
            id=f"panel-scatter-{name}", style=style,
        )
        for name, style in zip(SCATTER_VIEWS, scatter_panel_styles(dashboard.active_tab))
    ]
    return html.Div([
        dcc.Tabs(id="scatter-tabs", value=dashboard.active_tab,
                 children=[dcc.Tab(label=TAB_LABELS[n], value=n) for n in SCATTER_VIEWS]),
        *panels,
    ], id="panel-graphs")


def build_layout(dashboard: Dashboard,
                 include_mode: bool = True,
                 include_regions: bool = True,
                 include_formula: bool = True,
                 include_details: bool = True) -> html.Div:
    """Construct the Dash layout. Optional panels can be left out."""
    ind_style, clu_style = mode_button_styles(dashboard.store.mode.value)

    controls = []
    if include_mode:
        controls.append(html.Div([
            html.Label("Selection mode", style={"fontWeight": 600, "marginRight": 8}),
            html.Button("Individual", id="mode-individual", n_clicks=0, style=ind_style),
            html.Button("Cluster", id="mode-cluster", n_clicks=0, style=clu_style),
        ], id="mode-controls", style={"marginBottom": "8px"}))
    if include_regions:
        controls.append(html.Div(
            [html.Button(label, id=cid, n_clicks=0, type="button", style=BUTTON)
             for cid, label in REGION_BUTTONS],
            id="region-controls",
        ))

    left = html.Div([
        html.Div(controls, style=CARD),
        html.Div([
            dcc.Graph(id="map", figure=dashboard.renderer.map_figure, clear_on_unhover=True,
                      config={"displaylogo": False}),
            html.Div(id="tooltip", style=TOOLTIP_HIDDEN),
        ], style=CARD),
    ], style={"flex": "2", "minWidth": "600px"})

    sidebar: List = []
    if include_details:
        sidebar.append(html.Div([
            html.H3(dashboard.detail.title, id="map-county-title"),
            html.Div(render_detail(dashboard.detail), id="map-county-details"),
        ], style=CARD))

    tabs: Iterable = [dcc.Tab(label="Graphs", value="graphs")]
    panels = [_graphs_panel(dashboard)]
    if include_formula:
        tabs = [dcc.Tab(label="Needs Index", value="formula"), *tabs]
        panels.insert(0, _formula_panel())
    sidebar.append(html.Div([
        dcc.Tabs(id="sidebar-tabs", value="graphs", children=list(tabs)),
        *panels,
    ], style=CARD))

    return html.Div([
        html.H2("North Carolina Depression Hotspots", className="page-title"),
        html.P("County depression prevalence and its relationship to income, poverty and "
               "education. Click a county or a point to see details; switch to cluster "
               "mode to brush several counties at once.",
               style={"fontSize": "14px", "color": "#4b5563"}),
        html.Div([left, html.Div(sidebar, style={"flex": "1", "minWidth": "380px"})],
                 style={"display": "flex", "gap": "16px", "flexWrap": "wrap"}),
    ], style={"fontFamily": "Inter, sans-serif", "padding": "16px"})


def build_blank_layout(message: str) -> html.Div:
    """Shown when the data could not be loaded: nothing is rendered."""
    return html.Div([
        html.H2("North Carolina Depression Hotspots", className="page-title"),
        html.P(message, id="load-error", style={"color": "#6b7280"}),
    ], style={"fontFamily": "Inter, sans-serif", "padding": "16px"})
