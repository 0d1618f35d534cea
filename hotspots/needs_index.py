"""
Needs Index: a 0-10 composite of income, education, depression and poverty.

Each variable is min-max normalized across all counties. Income and
education are inverted (more of them means less need). Weights are
normalized to sum to 1 and the weighted sum is scaled to 0-10.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping

import numpy as np

from .config import DEFAULT_WEIGHT
from .data import Entity

logger = logging.getLogger(__name__)

VARIABLES = ("income", "education", "depression", "poverty")

# variable -> (entity attribute, inverted)
VARIABLE_FIELDS = {
    "income": ("median_income", True),
    "education": ("ba_plus_pct", True),
    "depression": ("depression_adj", False),
    "poverty": ("poverty_rate", False),
}

DEFAULT_WEIGHTS = {v: float(DEFAULT_WEIGHT) for v in VARIABLES}


def normalize(values: np.ndarray, invert: bool = False) -> np.ndarray:
    """Min-max scale to [0, 1]; a constant column maps to 0.5 everywhere."""
    finite = values[np.isfinite(values)]
    if finite.size == 0:
        return np.full(values.shape, np.nan)
    lo, hi = finite.min(), finite.max()
    if lo == hi:
        return np.where(np.isfinite(values), 0.5, np.nan)
    t = (values - lo) / (hi - lo)
    return 1 - t if invert else t


def normalized_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """Scale weights to sum to 1; an all-zero vector stays all-zero."""
    raw = {v: float(weights.get(v) or 0) for v in VARIABLES}
    total = sum(raw.values())
    if total == 0:
        total = 1.0
    return {v: w / total for v, w in raw.items()}


def compute_needs_index(entities: List[Entity], weights: Mapping[str, float]) -> None:
    """
    Recompute ``needs_index`` for every entity in place.

    Variables with zero weight are skipped entirely, so a missing value only
    leaves an entity's index absent when that variable carries weight.
    """
    if not entities:
        return
    w = normalized_weights(weights)
    score = np.zeros(len(entities))
    for var in VARIABLES:
        if w[var] == 0:
            continue
        attr, invert = VARIABLE_FIELDS[var]
        values = np.array([getattr(e, attr) for e in entities], dtype=float)
        score += normalize(values, invert=invert) * w[var]

    missing = 0
    for e, s in zip(entities, score):
        if np.isfinite(s):
            e.needs_index = round(float(s) * 10, 2)
        else:
            e.needs_index = None
            missing += 1
    if missing:
        logger.warning("Needs index unavailable for %d county(ies) with missing inputs", missing)
    logger.info("Computed needs index for %d counties with weights %s", len(entities), w)


def weights_from_controls(enabled: Mapping[str, bool],
                          values: Mapping[str, float]) -> Dict[str, float]:
    """Unchecked variables get weight 0; blank inputs count as 0."""
    weights = {}
    for var in VARIABLES:
        raw = values.get(var)
        try:
            value = float(raw) if raw not in (None, "") else 0.0
        except (TypeError, ValueError):
            value = 0.0
        weights[var] = max(value, 0.0) if enabled.get(var) else 0.0
    return weights
