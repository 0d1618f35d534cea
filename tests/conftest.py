import json

import pytest

from hotspots.interactions import Dashboard

from .helpers import JOINED_KEYS, make_entity, square


@pytest.fixture
def features():
    """Nine joinable squares west to east, one unjoinable and one without a row."""
    props = [
        {"GEOID": "37001"},
        {"FIPS": "3"},
        {"COUNTYFP": "005"},
        {},
        *({"GEOID": key} for key in JOINED_KEYS[4:]),
    ]
    feats = []
    for i, p in enumerate(props):
        feat = {"type": "Feature", "properties": p, "geometry": square(-84.0 + 0.5 * i)}
        if i == 3:
            feat["id"] = 37007
        feats.append(feat)
    feats.append({"type": "Feature", "properties": {"NAME": "Nowhere"},
                  "geometry": square(-79.0)})
    feats.append({"type": "Feature", "properties": {"GEOID": "37199"},
                  "geometry": square(-78.5)})
    return feats


@pytest.fixture
def entities():
    rows = [
        make_entity(key, name=f"C{i}", dep=15.0 + i, crude=16.0 + i,
                    income=40000.0 + 5000 * i, poverty=20.0 - i, edu=15.0 + 3 * i)
        for i, key in enumerate(JOINED_KEYS)
    ]
    rows.append(make_entity("37099", name="Shapeless", dep=30.0))
    return rows


@pytest.fixture
def dashboard(entities, features):
    return Dashboard(entities, features)


@pytest.fixture
def csv_file(tmp_path):
    path = tmp_path / "NC_County_Data.csv"
    path.write_text(
        "CountyFIPS,CountyName,DEPRESSION_AdjPrev,DEPRESSION_CrudePrev,TotalPopulation,"
        "TotalPop18plus,MedianIncome,PovertyRate,BAplusPercent\n"
        "37001,Alamance,22.1,22.5,171415,133000,61000,13.2,27.5\n"
        "37003,Alexander,24.0,24.8,36444,29000,55000,11.9,16.1\n"
        "37005,Alleghany,23.3,24.0,10888,8900,44000,16.4,19.0\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def geojson_file(tmp_path):
    path = tmp_path / "nc-counties.geojson"
    feats = [
        {"type": "Feature", "properties": {"GEOID": key}, "geometry": square(-81.0 + i)}
        for i, key in enumerate(["37001", "37003", "37005"])
    ]
    path.write_text(json.dumps({"type": "FeatureCollection", "features": feats}),
                    encoding="utf-8")
    return path
