import pytest

from hotspots.config import (
    BASE_STROKE, BASE_STROKE_WIDTH, HOVER_STROKE, HOVER_STROKE_WIDTH, NEUTRAL_FILL,
    SELECTED_STROKE,
)
from hotspots.figures import BrushRect
from hotspots.selection import SelectionKind, SelectionMode, SelectionState

from .helpers import JOINED_KEYS

EVERYTHING = BrushRect(0, 1e9, 0, 100)


def test_scatter_click_selects_in_individual_mode(dashboard):
    dashboard.click("income", "37003")
    assert dashboard.store.current() == SelectionState.single("37003")
    assert dashboard.detail.title == "C1 County"
    assert dashboard.renderer.map_stroke_of("37003")[0] == SELECTED_STROKE


def test_scatter_click_in_cluster_mode_is_ignored(dashboard):
    dashboard.control_changed("mode", "cluster")
    dashboard.click("poverty", "37003")
    assert dashboard.store.current() == SelectionState.none()


def test_map_click_selects_in_either_mode(dashboard):
    dashboard.control_changed("mode", "cluster")
    dashboard.click("map", "37005")
    assert dashboard.store.current() == SelectionState.single("37005")


def test_click_on_unknown_or_unjoined_shape_is_ignored(dashboard):
    dashboard.click("map", "unjoined-9")
    dashboard.click("map", None)
    assert dashboard.store.current() == SelectionState.none()


def test_click_overrides_region_selection(dashboard):
    dashboard.select_region("west")
    dashboard.click("map", "37017")
    assert dashboard.store.current() == SelectionState.single("37017")


def test_brush_updates_every_frame(dashboard):
    dashboard.control_changed("mode", "cluster")
    seen = []
    dashboard.store.subscribe(lambda state, s: seen.append(state))

    dashboard.drag_start("income")
    dashboard.drag_move("income", BrushRect(39000, 46000, 0, 100))
    assert dashboard.store.current().keys == {"37001", "37003"}
    assert dashboard.renderer.point_style_of("education", "37003")["radius"] == 6
    assert dashboard.renderer.map_stroke_of("37001")[0] == SELECTED_STROKE

    dashboard.drag_move("income", BrushRect(39000, 51000, 0, 100))
    # the shapeless county is still plotted
    assert dashboard.store.current().keys == {"37001", "37003", "37005", "37099"}
    dashboard.drag_end("income", BrushRect(39000, 51000, 0, 100))

    assert len(seen) == 3
    assert not dashboard.is_brushing
    assert dashboard.store.current().kind is SelectionKind.MULTIPLE


def test_brush_covering_no_points_clears(dashboard):
    dashboard.control_changed("mode", "cluster")
    dashboard.drag_start("poverty")
    dashboard.drag_move("poverty", BrushRect(100, 200, 100, 200))
    dashboard.drag_end("poverty", BrushRect(100, 200, 100, 200))
    assert dashboard.store.current() == SelectionState.none()


def test_brush_release_without_area_clears(dashboard):
    dashboard.control_changed("mode", "cluster")
    dashboard.select_region("all")
    dashboard.drag_start("income")
    dashboard.drag_end("income", None)
    assert dashboard.store.current() == SelectionState.none()


def test_click_during_brush_is_suppressed(dashboard):
    dashboard.control_changed("mode", "cluster")
    dashboard.drag_start("income")
    dashboard.click("map", "37001")
    assert dashboard.store.current() == SelectionState.none()


def test_brush_needs_cluster_mode(dashboard):
    dashboard.drag_start("income")
    dashboard.drag_move("income", EVERYTHING)
    dashboard.drag_end("income", EVERYTHING)
    assert dashboard.store.current() == SelectionState.none()


def test_mode_switch_resets_and_toggles_brush(dashboard):
    dashboard.click("map", "37001")
    dashboard.control_changed("mode", "cluster")
    assert dashboard.store.current() == SelectionState.none()
    assert all(f.layout.dragmode == "select"
               for f in dashboard.renderer.scatter_figures.values())

    dashboard.drag_start("income")
    dashboard.control_changed("mode", SelectionMode.INDIVIDUAL)
    assert not dashboard.is_brushing
    assert not any(f.layout.dragmode for f in dashboard.renderer.scatter_figures.values())


def test_region_buttons(dashboard):
    dashboard.click("map", "37001")
    dashboard.control_changed("region", "east")
    assert dashboard.store.current() == SelectionState.multiple({JOINED_KEYS[8]})
    assert dashboard.detail.is_empty

    dashboard.control_changed("region", "all")
    assert dashboard.store.current().keys == set(JOINED_KEYS)

    dashboard.control_changed("clear")
    assert dashboard.store.current() == SelectionState.none()


def test_tab_switch_reapplies_single_selection(dashboard):
    dashboard.click("income", "37009")
    dashboard.control_changed("scatter_tab", "education")
    assert dashboard.active_tab == "education"
    assert dashboard.renderer.point_style_of("education", "37009")["radius"] == 6


def test_apply_needs_index_recolors_map(dashboard):
    dashboard.click("map", "37001")
    dashboard.apply_needs_index({"income": 0, "education": 0, "depression": 1, "poverty": 0})

    joined = dashboard.renderer.map_figure.data[0]
    assert joined.colorbar.title.text == "Needs Index (0-10)"
    assert joined.z[0] == 0 and joined.z[-1] == pytest.approx(5.33, abs=0.01)
    # selection survives the redraw
    assert dashboard.renderer.map_stroke_of("37001")[0] == SELECTED_STROKE
    assert dashboard.detail.fields[0].value == "0.00/10"


def test_county_missing_a_weighted_input_is_neutral_on_needs_layer(dashboard):
    dashboard.by_key["37001"].poverty_rate = float("nan")
    dashboard.reset_needs_index()

    joined, neutral = dashboard.renderer.map_figure.data
    assert dashboard.by_key["37001"].needs_index is None
    assert "37001" not in joined.locations
    assert max(joined.z) <= joined.zmax
    assert dashboard.renderer.fill_of("37001") == NEUTRAL_FILL


def test_reset_needs_index_uses_equal_weights(dashboard):
    dashboard.reset_needs_index()
    assert all(e.needs_index is not None for e in dashboard.entities)
    assert dashboard.layer == "needs"


def test_hover_events(dashboard):
    tooltip = dashboard.pointer_enter("map", "37003")
    assert tooltip.lines[0] == "C1 County"
    assert dashboard.pointer_enter("map", "unjoined-9") is None
    dashboard.pointer_leave("map")
    assert dashboard.renderer.tooltip is None


def test_hover_onto_unjoined_shape_restores_previous_county(dashboard):
    dashboard.pointer_enter("map", "37001")
    assert dashboard.renderer.map_stroke_of("37001") == (HOVER_STROKE, HOVER_STROKE_WIDTH)

    assert dashboard.pointer_enter("map", "unjoined-9") is None
    assert dashboard.renderer.map_stroke_of("37001") == (BASE_STROKE, BASE_STROKE_WIDTH)
    assert dashboard.renderer.tooltip is None


def test_unknown_control(dashboard):
    with pytest.raises(ValueError):
        dashboard.control_changed("zoom", 2)


def test_reset_lifecycle(dashboard):
    dashboard.apply_needs_index({"income": 1})
    dashboard.control_changed("mode", "cluster")
    dashboard.select_region("all")
    dashboard.reset()
    assert dashboard.store.mode is SelectionMode.INDIVIDUAL
    assert dashboard.store.current() == SelectionState.none()
    assert all(e.needs_index is None for e in dashboard.entities)
    title = dashboard.renderer.map_figure.data[0].colorbar.title.text
    assert title == "Depression Rate (age-adjusted %)"
