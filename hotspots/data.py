"""
Data loaders for the county table and the county boundaries.
- CSV: data/NC_County_Data.csv, one row per county keyed by CountyFIPS
- GeoJSON: data/nc-counties.geojson, identifiers resolved by geo_keys
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import numpy as np
import pandas as pd

from .config import COUNTY_KEY_WIDTH
from .geo_keys import geo_key_of

logger = logging.getLogger(__name__)


class DataLoadError(Exception):
    """Raised when an input file is missing or malformed."""


KEY_COLUMN = "CountyFIPS"
NAME_COLUMN = "CountyName"
NUMERIC_COLUMNS = [
    "DEPRESSION_AdjPrev",
    "DEPRESSION_CrudePrev",
    "TotalPopulation",
    "TotalPop18plus",
    "MedianIncome",
    "PovertyRate",
    "BAplusPercent",
]
REQUIRED_COLUMNS = {KEY_COLUMN, NAME_COLUMN, *NUMERIC_COLUMNS}


@dataclass
class Entity:
    """One county: a CSV row joined to (at most) one boundary by FIPS."""

    fips: str
    name: str
    depression_adj: float
    depression_crude: float
    total_population: float
    adult_population: float
    median_income: float
    poverty_rate: float
    ba_plus_pct: float
    needs_index: Optional[float] = None


# ======================
# Utilities
# ======================

def coerce_num(x):
    """Safely coerce to float; return NaN on failure."""
    try:
        return float(x)
    except (TypeError, ValueError):
        return np.nan


# ======================
# Data Loaders
# ======================

def load_county_rows(csv_path: Path) -> pd.DataFrame:
    """
    Load the county CSV and normalize keys and numeric fields.

    Rows without a key are dropped; for duplicate keys the first row is kept.
    Non-numeric cells become NaN and are reported in the log.
    """
    try:
        df = pd.read_csv(csv_path, dtype=str)
    except FileNotFoundError as exc:
        raise DataLoadError(f"County CSV not found: {csv_path}") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Could not parse county CSV {csv_path}: {exc}") from exc

    df.rename(columns={c: c.strip() for c in df.columns}, inplace=True)
    missing = REQUIRED_COLUMNS.difference(set(df.columns))
    if missing:
        raise DataLoadError(f"CSV is missing required columns: {sorted(missing)}")

    df[KEY_COLUMN] = df[KEY_COLUMN].fillna("").astype(str).str.strip()
    no_key = df[KEY_COLUMN] == ""
    if no_key.any():
        logger.warning("Dropping %d row(s) without a %s", int(no_key.sum()), KEY_COLUMN)
        df = df[~no_key].copy()
    df[KEY_COLUMN] = df[KEY_COLUMN].str.zfill(COUNTY_KEY_WIDTH)
    df[NAME_COLUMN] = df[NAME_COLUMN].fillna("").astype(str).str.strip()

    for c in NUMERIC_COLUMNS:
        raw = df[c]
        df[c] = raw.map(coerce_num)
        bad = df[c].isna() & raw.notna()
        if bad.any():
            logger.warning("Column %s has %d non-numeric value(s); treated as missing",
                           c, int(bad.sum()))

    dupes = df[KEY_COLUMN].duplicated(keep="first")
    if dupes.any():
        logger.warning("Dropping %d duplicate row(s) for keys %s", int(dupes.sum()),
                       sorted(df.loc[dupes, KEY_COLUMN].unique()))
        df = df[~dupes]

    logger.info("Loaded %d county rows from %s", len(df), csv_path)
    return df.reset_index(drop=True)


def load_geojson(path: Path) -> List[dict]:
    """Load the county FeatureCollection and return its features."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            geojson = json.load(f)
    except FileNotFoundError as exc:
        raise DataLoadError(f"GeoJSON not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Could not parse GeoJSON {path}: {exc}") from exc

    features = geojson.get("features") if isinstance(geojson, dict) else None
    if not isinstance(features, list):
        raise DataLoadError(f"GeoJSON {path} has no feature list")
    logger.info("Loaded %d features (type=%s) from %s",
                len(features), geojson.get("type"), path)
    return features


def build_entities(df: pd.DataFrame) -> List[Entity]:
    """Turn normalized CSV rows into Entity records, in file order."""
    return [
        Entity(
            fips=row[KEY_COLUMN],
            name=row[NAME_COLUMN],
            depression_adj=row["DEPRESSION_AdjPrev"],
            depression_crude=row["DEPRESSION_CrudePrev"],
            total_population=row["TotalPopulation"],
            adult_population=row["TotalPop18plus"],
            median_income=row["MedianIncome"],
            poverty_rate=row["PovertyRate"],
            ba_plus_pct=row["BAplusPercent"],
        )
        for _, row in df.iterrows()
    ]


def index_entities(entities: Iterable[Entity]) -> Dict[str, Entity]:
    return {e.fips: e for e in entities}


def join_report(by_key: Dict[str, Entity], features: List[dict]) -> Dict[str, Set[str]]:
    """
    Compare table keys to boundary keys and log both kinds of mismatch.

    Unmatched entities still appear in the scatterplots; unmatched or
    unjoinable boundaries are drawn in the neutral fill.
    """
    feature_keys = [geo_key_of(f) for f in features]
    unjoinable = sum(1 for k in feature_keys if not k)
    resolved = {k for k in feature_keys if k}

    rows_without_shape = set(by_key).difference(resolved)
    shapes_without_row = resolved.difference(by_key)

    if unjoinable:
        logger.warning("%d feature(s) have no resolvable county key", unjoinable)
    if rows_without_shape:
        logger.warning("%d county row(s) have no boundary and are left off the map: %s",
                       len(rows_without_shape), sorted(rows_without_shape))
    if shapes_without_row:
        logger.warning("%d boundary(ies) have no county row and are drawn unfilled: %s",
                       len(shapes_without_row), sorted(shapes_without_row))
    logger.info("Joined %d of %d county rows to boundaries",
                len(set(by_key) & resolved), len(by_key))
    return {"rows_without_shape": rows_without_shape,
            "shapes_without_row": shapes_without_row}
