import pytest

from loanfields.materialize import materialize_all
from loanfields.tables import records_frame


def _properties():
    return {
        "property2.street": "2 Oak",
        "property2.appraised_value": "$450,000",
        "property1.street": "1 Elm",
        "property1.appraised_value": "",
        "property1.primary_property": "true",
    }


def test_rows_follow_display_order():
    df = records_frame(materialize_all(_properties(), "property"), "property")
    assert list(df["id"]) == ["property1", "property2"]
    assert list(df["display_name"]) == ["1 Elm", "2 Oak"]
    assert "appraisal_occupancy" not in df.columns
    assert "occupancy" in df.columns


def test_numeric_columns_are_parsed():
    df = records_frame(
        materialize_all(_properties(), "property"),
        "property",
        columns=["street", "appraised_value"],
        numeric_columns=["appraised_value"],
    )
    assert list(df.columns) == ["id", "display_name", "street", "appraised_value"]
    assert list(df["appraised_value"]) == [0.0, 450000.0]


def test_empty_family_gives_empty_frame():
    df = records_frame([], "lender", columns=["full_name"])
    assert df.empty
    assert list(df.columns) == ["id", "display_name", "full_name"]


def test_unknown_column():
    with pytest.raises(ValueError):
        records_frame([], "lender", columns=["shoe_size"])


def test_unknown_numeric_column():
    records = materialize_all(_properties(), "property")
    with pytest.raises(ValueError):
        records_frame(records, "property", columns=["street"], numeric_columns=["ltv"])
    with pytest.raises(ValueError):
        records_frame(records, "property", numeric_columns=["acreage"])
