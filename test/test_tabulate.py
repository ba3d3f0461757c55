from tinyframe.frame import create_table
from tinyframe.utils.tabulate import format_value, tabulate


def test_format_value():
    assert format_value(None) == "null"
    assert format_value(float("nan")) == "null"
    assert format_value(3.14159) == "3.14"
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value(7) == "7"
    assert format_value("x" * 40) == "x" * 27 + "..."


def test_tabulate_with_nulls():
    table = create_table({"name": ["a", None], "flag": [True, False]})
    assert tabulate(table) == (
        "name | flag \n"
        "---- | -----\n"
        "a    | true \n"
        "null | false"
    )


def test_tabulate_truncates_rows():
    table = create_table({"n": list(range(5))})
    text = tabulate(table, max_rows=2)
    assert text.splitlines() == ["n", "-", "0", "1", "... and 3 more rows"]



def test_tabulate_aligns_numeric_columns_right():
    table = create_table({"id": [7, 1200], "code": ["a", "bcdef"], "ratio": [0.5, None]})
    assert tabulate(table) == (
        "  id | code  | ratio\n"
        "---- | ----- | -----\n"
        "   7 | a     |  0.50\n"
        "1200 | bcdef |  null"
    )
