from hotspots.details import PLACEHOLDER_TITLE, present_details, tooltip_lines

from .helpers import make_entity


def test_placeholder_without_entity():
    record = present_details(None)
    assert record.title == PLACEHOLDER_TITLE
    assert record.is_empty


def test_fields_in_fixed_order_and_format():
    county = make_entity("37183", name="Wake", dep=18.04, crude=17.96, pop=1129410,
                         income=88471, poverty=8.56, edu=53.2)
    county.needs_index = 3.456

    record = present_details(county)
    assert record.title == "Wake County"
    assert [(f.label, f.value) for f in record.fields] == [
        ("Needs index", "3.46/10"),
        ("Depression (age-adjusted)", "18.0%"),
        ("Depression (crude)", "18.0%"),
        ("Total population", "1,129,410"),
        ("Median income", "$88,471"),
        ("Poverty rate", "8.6%"),
        ("Bachelor's degree or higher", "53.2%"),
    ]
    assert all(f.info for f in record.fields)


def test_needs_index_absent():
    record = present_details(make_entity("37001"))
    assert record.fields[0].value == "N/A"


def test_missing_number_shows_na():
    record = present_details(make_entity("37001", income=float("nan")))
    assert record.fields[4].value == "N/A"


def test_tooltip_lines():
    lines = tooltip_lines(make_entity("37001", name="Alamance", dep=22.14, crude=22.5))
    assert lines == ["Alamance County", "Depression (age-adjusted): 22.1%",
                     "Depression (crude): 22.5%"]
