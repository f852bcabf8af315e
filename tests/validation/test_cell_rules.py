import math

import pytest

from cart_parser.domain.schema import CART_SCHEMA, ColumnType
from cart_parser.domain.validation.cell_rules import (
    get_cell_rule,
    is_positive_number,
    split_cells,
    split_lines,
    to_number,
)


def test_schema_declares_three_ordered_columns():
    assert CART_SCHEMA.column_count == 3
    assert CART_SCHEMA.header_names == ("Product name", "Price", "Quantity")
    assert [c.attr for c in CART_SCHEMA.columns] == ["name", "price", "quantity"]
    assert [c.type for c in CART_SCHEMA.columns] == [
        ColumnType.STRING,
        ColumnType.NUMBER_POSITIVE,
        ColumnType.NUMBER_POSITIVE,
    ]


def test_split_cells_trims_and_drops_trailing_comma_cell():
    assert split_cells("  a ,  1,2 , ") == ["a", "1", "2"]
    assert split_cells("a,,b") == ["a", "", "b"]
    assert split_cells("   ") == [""]


def test_split_lines_keeps_whitespace_only_lines():
    assert split_lines("h\n\n  \nx\n") == ["h", "", "x"]


@pytest.mark.parametrize(
    "text, expected",
    [("3", 3.0), (" 89974.00 ", 89974.0), ("-2.5", -2.5), (".5", 0.5), ("1e3", 1000.0), ("+7", 7.0)],
)
def test_to_number_parses_decimal_literals(text, expected):
    assert to_number(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "NaN", "nan", "inf", "true", "1_000", "0x10", "1,5"])
def test_to_number_returns_nan_sentinel(text):
    value = to_number(text)

    assert math.isnan(value)
    assert value != value


def test_positive_number_accepts_zero_and_rejects_negative():
    assert is_positive_number("0")
    assert is_positive_number("0.00")
    assert not is_positive_number("-0.01")
    assert not is_positive_number("")


def test_cell_rule_messages_quote_received_value():
    assert get_cell_rule(ColumnType.STRING).error_message("") == (
        'Expected cell to be a nonempty string but received "".'
    )
    assert get_cell_rule(ColumnType.NUMBER_POSITIVE).error_message("{}") == (
        'Expected cell to be a positive number but received "{}".'
    )
