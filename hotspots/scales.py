"""Sequential color mapping and legend (color bar) settings for the map."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
from plotly.colors import get_colorscale, sample_colorscale

from .config import COLOR_SCHEME, LEGEND_TICKS, NEUTRAL_FILL


def extent(values: Iterable[Optional[float]]) -> Tuple[float, float]:
    """(min, max) of the finite values; (0, 0) when there are none."""
    finite = [v for v in values if v is not None and math.isfinite(v)]
    if not finite:
        return 0.0, 0.0
    return min(finite), max(finite)


@dataclass(frozen=True)
class ColorMapping:
    """Maps a number to a color by interpolating ``scheme`` over ``domain``."""

    domain: Tuple[float, float]
    scheme: str = COLOR_SCHEME

    def position(self, value: float) -> float:
        lo, hi = self.domain
        if hi == lo:
            return 0.5
        return float(np.clip((value - lo) / (hi - lo), 0.0, 1.0))

    def __call__(self, value: Optional[float]) -> str:
        if value is None or not math.isfinite(value):
            return NEUTRAL_FILL
        return sample_colorscale(get_colorscale(self.scheme), [self.position(value)])[0]

    def plotly_kwargs(self) -> dict:
        """zmin/zmax/colorscale for a Plotly choropleth trace."""
        lo, hi = self.domain
        if lo == hi:
            lo, hi = lo - 0.5, hi + 0.5
        return {"colorscale": self.scheme, "zmin": lo, "zmax": hi}


@dataclass(frozen=True)
class LegendSpec:
    title: str
    domain: Tuple[float, float]
    ticks: int = LEGEND_TICKS

    def tick_values(self) -> List[float]:
        lo, hi = self.domain
        return [lo + (hi - lo) * i / (self.ticks - 1) for i in range(self.ticks)]

    def colorbar(self) -> dict:
        values = self.tick_values()
        return dict(
            title=dict(text=self.title, side="right", font=dict(size=12)),
            tickmode="array",
            tickvals=values,
            ticktext=[f"{v:.1f}" for v in values],
            len=0.7,
            thickness=15,
        )
