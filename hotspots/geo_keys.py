"""Resolve a GeoJSON county feature to its 5-digit county FIPS key."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from .config import COUNTY_CODE_WIDTH, COUNTY_KEY_WIDTH, STATE_FIPS


def _as_code(value: Any) -> str:
    # Numeric identifiers may come through as 37001.0
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def resolve_geo_key(properties: Optional[Mapping[str, Any]],
                    feature_id: Any = None) -> str:
    """
    Map a feature's identifier fields to the canonical county key.

    Fields are tried in order and the first one present wins:
    GEOID, FIPS (county-only), COUNTYFP (county-only), then the feature id.
    Returns "" when nothing matches; callers treat that as unjoinable.
    """
    props = properties or {}
    if props.get("GEOID"):
        return _as_code(props["GEOID"]).zfill(COUNTY_KEY_WIDTH)
    if props.get("FIPS"):
        return STATE_FIPS + _as_code(props["FIPS"]).zfill(COUNTY_CODE_WIDTH)
    if props.get("COUNTYFP"):
        return STATE_FIPS + _as_code(props["COUNTYFP"]).zfill(COUNTY_CODE_WIDTH)
    if feature_id is not None:
        return _as_code(feature_id).zfill(COUNTY_KEY_WIDTH)
    return ""


def geo_key_of(feature: Mapping[str, Any]) -> str:
    """Resolve a whole GeoJSON feature."""
    return resolve_geo_key(feature.get("properties"), feature.get("id"))
