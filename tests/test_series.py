# tests/test_series.py
from __future__ import annotations

import polars as pl
import polars.testing as plt
import pytest

from svy_labelled.errors import DomainError
from svy_labelled.labelled import labelled
from svy_labelled.labelled_spss import labelled_spss
from svy_labelled.metadata import UserMissing
from svy_labelled.series import from_series, labelled_columns, to_series, user_missing_mask
from svy_labelled.tagged_na import tagged_na

INF = float("inf")


# ---------- fixtures & helpers ----------


def _fake_meta():
    # Mirrors the reader's meta layout
    return {
        "vars": [
            {
                "name": "q1",
                "label": "Satisfaction",
                "label_set": "$SAT",
                "fmt": None,
                "user_missing": {"values": [9]},
            },
            {
                "name": "age",
                "label": None,
                "label_set": None,
                "fmt": None,
                "user_missing": {"range": [-99, -1]},
            },
            {"name": "x", "label": None, "label_set": None, "fmt": None},
            {"name": "not_in_df", "label": None, "user_missing": {"values": [1]}},
        ],
        "value_labels": [
            {"set_name": "$SAT", "mapping": {"1": "Low", "2": "High", "9": "Refused"}},
        ],
    }


# ---------- UserMissing ----------


def test_user_missing_from_reader_meta():
    spec = UserMissing.from_meta({"user_missing": {"values": [9], "range": [1, 3]}})
    assert spec.values == [9]
    assert spec.range == (1, 3)
    assert not spec.is_empty
    assert spec.as_kwargs() == {"na_values": [9], "na_range": (1, 3)}


def test_user_missing_accepts_zap_style_keys():
    spec = UserMissing.from_meta({"col": "x", "na_values": ["z"], "na_range": None})
    assert spec.values == ["z"]
    assert spec.range is None


def test_user_missing_empty():
    assert UserMissing.from_meta(None).is_empty
    assert UserMissing.from_meta({"name": "x", "user_missing": None}).is_empty
    assert UserMissing.from_meta({"user_missing": {"values": []}}).is_empty


# ---------- from_series / to_series ----------


def test_from_series_converts_string_label_keys():
    s = pl.Series("q", [1, 2, 9, None])
    x = from_series(s, labels={"1": "Yes", "2": "No"}, na_values=[9], label="Q")
    assert x.labels == {1: "Yes", 2: "No"}
    assert x.label == "Q"
    assert x.is_na() == [False, False, True, True]


def test_from_series_float_label_keys():
    x = from_series(pl.Series("v", [8.5, 1.0]), labels={"8.5": "Half"})
    assert x.labels == {8.5: "Half"}


def test_from_series_keeps_string_keys_for_text():
    x = from_series(pl.Series("s", ["a", "z"]), labels={"z": "Zed"}, na_values=["z"])
    assert x.labels == {"z": "Zed"}
    assert x.is_na() == [False, True]


def test_na_values_from_a_series():
    x = labelled_spss([1, 8, 9], na_values=pl.Series([8, 9]))
    assert x.na_values == (8, 9)
    assert x.is_na() == [False, True, True]


def test_to_series_integer():
    x = labelled_spss([1, 2, 9, None], na_values=[9])
    plt.assert_series_equal(to_series(x, "q"), pl.Series("q", [1, 2, 9, None], dtype=pl.Int64))


def test_to_series_drops_user_missing_when_asked():
    x = labelled_spss([1, 2, 9, None], na_values=[9])
    out = to_series(x, "q", user_na=False)
    plt.assert_series_equal(out, pl.Series("q", [1, 2, None, None], dtype=pl.Int64))


def test_to_series_double_and_character():
    out = to_series(labelled([1, tagged_na("a"), 2.5]), "d")
    assert out.dtype == pl.Float64
    assert out.to_list() == [1.0, None, 2.5]

    out = to_series(labelled_spss(["a", None]), "s")
    assert out.dtype == pl.Utf8
    assert out.to_list() == ["a", None]


# ---------- user_missing_mask ----------


def test_mask_numeric():
    s = pl.Series("x", [1, 2, 9, 10, None])
    mask = user_missing_mask(s, na_values=[9], na_range=(10, INF))
    assert mask.name == "x"
    assert mask.dtype == pl.Boolean
    assert mask.to_list() == [False, False, True, True, True]


def test_mask_float_nan_counts_as_missing():
    s = pl.Series("x", [1.0, float("nan"), 3.5])
    assert user_missing_mask(s, na_range=(3, 4)).to_list() == [False, True, True]


def test_mask_strings():
    s = pl.Series("s", ["a", "z", None])
    assert user_missing_mask(s, na_values=["z"]).to_list() == [False, True, True]


def test_mask_range_on_strings_is_a_domain_error():
    with pytest.raises(DomainError):
        user_missing_mask(pl.Series("s", ["a"]), na_range=(1, 2))


def test_mask_agrees_with_labelled_spss():
    values = [1, 5, 7, 9, None, -3]
    s = pl.Series("x", values)
    x = from_series(s, na_values=[9], na_range=(-5, -1))
    assert user_missing_mask(s, na_values=[9], na_range=(-5, -1)).to_list() == x.is_na()


# ---------- labelled_columns ----------


def test_labelled_columns_hydrates_user_missing_columns():
    df = pl.DataFrame({"q1": [1, 2, 9], "age": [30, -9, 50], "x": [1, 2, 3]})
    cols = labelled_columns(df, _fake_meta())

    assert sorted(cols) == ["age", "q1"]

    q1 = cols["q1"]
    assert q1.labels == {1: "Low", 2: "High", 9: "Refused"}
    assert q1.label == "Satisfaction"
    assert q1.na_values == (9,)
    assert q1.is_na() == [False, False, True]

    age = cols["age"]
    assert age.labels == {}
    assert age.na_range == (-99, -1)
    assert age.is_na() == [False, True, False]
