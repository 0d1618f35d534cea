"""Split counties into west / central / east thirds by centroid longitude."""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

from shapely.errors import ShapelyError
from shapely.geometry import shape

from .geo_keys import geo_key_of

logger = logging.getLogger(__name__)

REGIONS = ("west", "central", "east")


def feature_centroid_lon(feature: dict) -> Optional[float]:
    """Longitude of the feature's centroid, or None for an unusable geometry."""
    geom = feature.get("geometry")
    if not geom:
        return None
    try:
        centroid = shape(geom).centroid
    except (ShapelyError, ValueError, TypeError, IndexError, KeyError) as exc:
        logger.warning("Skipping feature with invalid geometry: %s", exc)
        return None
    if centroid.is_empty:
        return None
    return centroid.x


class RegionPartitioner:
    """
    Positional tertiles of the sorted centroid longitudes.

    Thresholds are the longitudes at ranks n/3 and 2n/3; west takes
    lon <= t1, central t1 < lon <= t2 and east lon > t2.
    """

    def __init__(self, features: List[dict], joined_keys: Mapping,
                 key_of: Callable[[dict], str] = geo_key_of):
        self._joined = joined_keys
        self._key_of = key_of
        self._lon_by_feature: List[Tuple[dict, float]] = []
        for f in features:
            lon = feature_centroid_lon(f)
            if lon is not None:
                self._lon_by_feature.append((f, lon))

        lons = sorted(lon for _, lon in self._lon_by_feature)
        if lons:
            self.t1 = lons[len(lons) // 3]
            self.t2 = lons[(len(lons) * 2) // 3]
        else:
            self.t1 = self.t2 = None

    def region_keys_for_predicate(self, pred: Callable[[float], bool]) -> Set[str]:
        keys = set()
        for f, lon in self._lon_by_feature:
            if not pred(lon):
                continue
            key = self._key_of(f)
            if key and key in self._joined:
                keys.add(key)
        return keys

    def predicate(self, region: str) -> Callable[[float], bool]:
        t1, t2 = self.t1, self.t2
        if region == "all":
            return lambda lon: True
        if t1 is None:
            return lambda lon: False
        if region == "west":
            return lambda lon: lon <= t1
        if region == "central":
            return lambda lon: t1 < lon <= t2
        if region == "east":
            return lambda lon: lon > t2
        raise ValueError(f"Unknown region: {region!r}")

    def keys_for(self, region: str) -> Set[str]:
        return self.region_keys_for_predicate(self.predicate(region))

    def partition(self) -> Dict[str, Set[str]]:
        return {r: self.keys_for(r) for r in REGIONS}
