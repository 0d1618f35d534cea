from hotspots.data import Entity


def square(lon, lat=35.0, size=0.4):
    return {
        "type": "Polygon",
        "coordinates": [[[lon, lat], [lon + size, lat], [lon + size, lat + size],
                         [lon, lat + size], [lon, lat]]],
    }


def make_entity(fips, name=None, dep=20.0, crude=21.0, pop=50000.0, adults=40000.0,
                income=50000.0, poverty=15.0, edu=25.0):
    return Entity(
        fips=fips, name=name or f"County {fips}",
        depression_adj=dep, depression_crude=crude,
        total_population=pop, adult_population=adults,
        median_income=income, poverty_rate=poverty, ba_plus_pct=edu,
    )


JOINED_KEYS = [f"37{n:03d}" for n in range(1, 18, 2)]  # 37001 .. 37017
