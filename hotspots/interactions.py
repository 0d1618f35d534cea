"""
Dashboard state and the named interaction events that drive it.

One Dashboard per loaded dataset. Pointer, click, drag and control events
write to the SelectionStore; the store synchronously restyles the renderer
and refreshes the detail record before the event method returns.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

from .config import DEPRESSION_LEGEND_TITLE, NEEDS_LEGEND_TITLE
from .data import Entity, index_entities
from .details import DetailRecord, present_details
from .figures import MAP_VIEW, SCATTER_SPECS, BrushRect, LinkedViewRenderer, Tooltip
from .geo_keys import geo_key_of
from .needs_index import DEFAULT_WEIGHTS, compute_needs_index
from .regions import RegionPartitioner
from .scales import ColorMapping, LegendSpec, extent
from .selection import SelectionKind, SelectionMode, SelectionState, SelectionStore

logger = logging.getLogger(__name__)

SCATTER_VIEWS = tuple(spec.name for spec in SCATTER_SPECS)


class Dashboard:
    """Entities, boundaries, selection store and renderer for one dataset."""

    def __init__(self, entities: List[Entity], features: List[dict],
                 store: Optional[SelectionStore] = None,
                 renderer: Optional[LinkedViewRenderer] = None):
        self.entities = entities
        self.by_key: Dict[str, Entity] = index_entities(entities)
        self.features = features
        self.store = store or SelectionStore()
        self.renderer = renderer or LinkedViewRenderer()
        self.partitioner = RegionPartitioner(features, self.by_key)
        self.is_brushing = False
        self.active_tab = SCATTER_VIEWS[0]
        self.layer = "depression"
        self.detail: DetailRecord = present_details(None)
        self.store.subscribe(self._on_selection)
        self.render_all()

    # ----------------------
    # Lifecycle
    # ----------------------

    def render_all(self) -> None:
        self.renderer.set_brush_enabled(self.store.brush_enabled)
        self._render_map()
        for spec in SCATTER_SPECS:
            self.renderer.render_scatter(self.entities, spec)

    def reset(self) -> None:
        """Drop the needs index and selection; redraw with depression colors."""
        for e in self.entities:
            e.needs_index = None
        self.is_brushing = False
        self.layer = "depression"
        self.active_tab = SCATTER_VIEWS[0]
        self.store.reset()
        self.render_all()

    def _render_map(self) -> None:
        if self.layer == "needs":
            domain = extent(e.needs_index for e in self.entities)
            title = NEEDS_LEGEND_TITLE
        else:
            domain = extent(e.depression_adj for e in self.entities)
            title = DEPRESSION_LEGEND_TITLE
        self.renderer.render_map(self.by_key, self.features, geo_key_of,
                                 ColorMapping(domain), LegendSpec(title, domain),
                                 layer=self.layer)

    def _on_selection(self, state: SelectionState, store: SelectionStore) -> None:
        self.renderer.set_brush_enabled(store.brush_enabled)
        self.renderer.apply_selection_visuals(state)
        if state.kind is SelectionKind.SINGLE:
            self.detail = present_details(self.by_key.get(state.key))
        else:
            self.detail = present_details(None)

    # ----------------------
    # Pointer events
    # ----------------------

    def pointer_enter(self, view: str, key: Optional[str]) -> Optional[Tooltip]:
        entity = self.by_key.get(key) if key else None
        if entity is None:
            # unjoined shape: drop any emphasis left on the previous county
            self.renderer.pointer_leave(view)
            return None
        return self.renderer.pointer_enter(view, entity)

    def pointer_leave(self, view: str) -> None:
        self.renderer.pointer_leave(view)

    def click(self, view: str, key: Optional[str]) -> None:
        """Promote a county to the single selection."""
        if self.is_brushing:
            return
        if view != MAP_VIEW and self.store.mode is not SelectionMode.INDIVIDUAL:
            return
        if key not in self.by_key:
            return
        self.store.select_single(key)

    # ----------------------
    # Brush events (cluster mode only)
    # ----------------------

    def drag_start(self, view: str) -> None:
        if self.store.brush_enabled:
            self.is_brushing = True

    def drag_move(self, view: str, rect: BrushRect) -> None:
        if not self.is_brushing:
            return
        self.store.select_multiple(self.renderer.points_in_rect(view, rect))

    def drag_end(self, view: str, rect: Optional[BrushRect]) -> None:
        if not self.is_brushing:
            return
        self.is_brushing = False
        if rect is None or rect.is_empty:
            self.store.clear()
            return
        self.store.select_multiple(self.renderer.points_in_rect(view, rect))

    # ----------------------
    # Controls
    # ----------------------

    def control_changed(self, control: str, value=None) -> None:
        if control == "mode":
            self.is_brushing = False
            self.store.set_mode(value)
        elif control == "scatter_tab":
            self.active_tab = value
            state = self.store.current()
            # Selection styling persists on every figure, so a multi-selection
            # needs nothing here. A single selection is re-applied so the tab
            # coming into view shows the enlarged point.
            if state.kind is SelectionKind.SINGLE:
                self.renderer.apply_selection_visuals(state)
        elif control == "region":
            self.select_region(value)
        elif control == "clear":
            self.clear_selection()
        else:
            raise ValueError(f"Unknown control: {control!r}")

    def select_region(self, region: str) -> None:
        keys = self.partitioner.keys_for(region)
        logger.debug("Region %s selects %d counties", region, len(keys))
        self.store.select_multiple(keys)

    def clear_selection(self) -> None:
        self.store.clear()

    def apply_needs_index(self, weights: Mapping[str, float]) -> None:
        compute_needs_index(self.entities, weights)
        self.layer = "needs"
        self._render_map()
        self.renderer.apply_selection_visuals(self.store.current())
        if self.store.current().kind is SelectionKind.SINGLE:
            self.detail = present_details(self.by_key.get(self.store.current().key))

    def reset_needs_index(self) -> None:
        self.apply_needs_index(DEFAULT_WEIGHTS)
