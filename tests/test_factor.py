# tests/test_factor.py
import polars as pl
import pytest

from svy_labelled.factor import as_factor
from svy_labelled.labelled import labelled
from svy_labelled.labelled_spss import labelled_spss


@pytest.fixture
def answers():
    return labelled_spss([1, 2, 9, None], {1: "Good", 9: "Refused"}, na_values=[9])


def test_default_prefers_labels(answers):
    out = as_factor(answers)
    assert out.dtype == pl.Categorical
    assert out.to_list() == ["Good", "2", "Refused", None]


def test_levels_labels(answers):
    assert as_factor(answers, levels="labels").to_list() == ["Good", None, "Refused", None]


def test_levels_values(answers):
    assert as_factor(answers, levels="values").to_list() == ["1", "2", "9", None]


def test_levels_both(answers):
    out = as_factor(answers, levels="BOTH", name="q")
    assert out.name == "q"
    assert out.to_list() == ["[1] Good", "2", "[9] Refused", None]


def test_double_values_print_like_r():
    out = as_factor(labelled([1.0, 2.5], {1.0: "One"}))
    assert out.to_list() == ["One", "2.5"]


def test_series_with_string_keyed_labels():
    s = pl.Series("x", [1, None, 5])
    cat = as_factor(s, labels={"1": "Good", "5": "Bad"}, levels="labels")
    assert cat.dtype == pl.Categorical
    assert cat.name == "x"
    assert cat.to_list() == ["Good", None, "Bad"]


def test_explicit_labels_override_own_labels(answers):
    assert as_factor(answers, labels={2: "Fair"}).to_list() == ["1", "Fair", "9", None]


def test_invalid_levels(answers):
    with pytest.raises(ValueError, match="levels"):
        as_factor(answers, levels="codes")


def test_rejects_other_inputs():
    with pytest.raises(TypeError):
        as_factor([1, 2])
