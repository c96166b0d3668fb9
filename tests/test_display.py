# tests/test_display.py
from svy_labelled.display import cat_line, format_labels, format_value, format_values
from svy_labelled.tagged_na import tagged_na


def test_cat_line():
    assert cat_line("a", 1, "b") == "a1b\n"


def test_format_value_matches_r_printing():
    assert format_value(1) == "1"
    assert format_value(9.0) == "9"
    assert format_value(2.5) == "2.5"
    assert format_value(float("inf")) == "Inf"
    assert format_value(float("-inf")) == "-Inf"
    assert format_value(None) == "NA"
    assert format_value(float("nan")) == "NA"
    assert format_value(tagged_na("x")) == "NA(x)"
    assert format_value("abc") == "abc"


def test_format_values_aligns_and_truncates():
    assert format_values([1, 10, None]) == " 1 10 NA"
    assert format_values([]) == ""
    assert format_values([1, 2, 3], max_print=2) == "1 2 ..."
    assert format_values([1, 2], max_print=0) == "..."


def test_format_values_shows_everything_by_default():
    out = format_values(list(range(100)))
    assert out.split() == [str(i) for i in range(100)]
    assert format_values(list(range(30)), max_print=None) == format_values(list(range(30)))


def test_format_labels_in_definition_order():
    lines = format_labels({8: "Bad", 1: "Good"})
    assert lines == ["", "Labels:", " value label", "     8   Bad", "     1  Good"]


def test_format_labels_widens_for_long_entries():
    lines = format_labels({"refused": "Refused to answer"})
    assert lines[2] == "   value             label"
    assert lines[3] == " refused Refused to answer"


def test_format_labels_empty():
    assert format_labels({}) == []
