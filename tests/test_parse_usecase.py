import logging
from pathlib import Path

import pytest

from cart_parser.domain.error_codes import ErrorCode, ErrorType
from cart_parser.domain.exceptions import ValidationFailed
from cart_parser.domain.models import CartItem, CartResult, create_error
from cart_parser.usecases.parse_usecase import CartParser, calc_total

SAMPLE_CSV = Path(__file__).resolve().parents[1] / "samples" / "cart.csv"


class _StaticReader:
    def __init__(self, text: str):
        self.text = text
        self.paths: list[str] = []

    def read_text(self, path: str) -> str:
        self.paths.append(path)
        return self.text


def _parser(text: str, **kwargs) -> CartParser:
    return CartParser(reader=_StaticReader(text), **kwargs)


def test_parse_returns_items_and_total():
    parser = _parser("""Product name, Price, Quantity
        Example product, 1, 3""")

    result = parser.parse()

    assert len(result.items) == 1
    item = result.items[0]
    assert item.id
    assert (item.name, item.price, item.quantity) == ("Example product", 1, 3)
    assert result.total == 3


def test_parse_uses_default_path_when_none_given():
    reader = _StaticReader("Product name, Price, Quantity")
    parser = CartParser(reader=reader, default_path="carts/today.csv")

    result = parser.parse()

    assert reader.paths == ["carts/today.csv"]
    assert result == CartResult(items=[], total=0.0)


def test_explicit_empty_path_is_not_replaced_by_default():
    reader = _StaticReader("Product name, Price, Quantity")
    parser = CartParser(reader=reader, default_path="carts/today.csv")

    parser.parse("")

    assert reader.paths == [""]


def test_create_error_builds_value_object():
    error = CartParser().create_error("row", 3, -1, "Expected row to have 3 cells but received 4.")

    assert error == create_error(ErrorType.ROW, 3, -1, "Expected row to have 3 cells but received 4.")
    assert error.to_dict() == {
        "type": "row",
        "row": 3,
        "column": -1,
        "message": "Expected row to have 3 cells but received 4.",
    }


def test_read_file_can_be_replaced():
    parser = CartParser()
    parser.read_file = lambda _path: "Product name, Price, Quantity\nPen, 2.5, 4"

    result = parser.parse("ignored.csv")

    assert result.total == 10


def test_validation_failure_raises_with_all_errors(caplog):
    parser = _parser("""Product name, Price, Quantity
        Example product, 9466, kgdsrgjsrj
        , 1, 1""")

    with caplog.at_level(logging.WARNING):
        with pytest.raises(ValidationFailed, match="Validation failed!") as exc_info:
            parser.parse()

    exc = exc_info.value
    assert str(exc) == "Validation failed!"
    assert exc.code is ErrorCode.VALIDATION_FAILED
    assert exc.errors == [
        create_error("cell", 1, 2, 'Expected cell to be a positive number but received "kgdsrgjsrj".'),
        create_error("cell", 2, 0, 'Expected cell to be a nonempty string but received "".'),
    ]
    for error in exc.errors:
        assert error.message in caplog.text


def test_line_parser_is_not_called_when_validation_fails():
    class _ExplodingLineParser:
        def parse_line(self, line):
            raise AssertionError("parse_line must not run for invalid input")

    parser = _parser("Product name, Price\nA, 1", line_parser=_ExplodingLineParser())

    with pytest.raises(ValidationFailed):
        parser.parse()


def test_missing_file_error_propagates_unwrapped(tmp_path):
    parser = CartParser()

    with pytest.raises(FileNotFoundError):
        parser.parse(str(tmp_path / "missing.csv"))


def test_ids_are_unique_and_come_from_factory():
    counter = iter(range(100))
    parser = _parser(
        "Product name, Price, Quantity\nA, 1, 1\nB, 2, 2\nC, 3, 3",
        id_factory=lambda: f"item-{next(counter)}",
    )

    result = parser.parse()

    assert [item.id for item in result.items] == ["item-0", "item-1", "item-2"]
    assert [item.name for item in result.items] == ["A", "B", "C"]


def test_default_ids_are_unique():
    parser = _parser("Product name, Price, Quantity\nA, 1, 1\nA, 1, 1")

    result = parser.parse()

    assert result.items[0].id != result.items[1].id


def test_calc_total_is_plain_sum():
    items = [CartItem(id="1", name="a", price=0.1, quantity=3), CartItem(id="2", name="b", price=2, quantity=0)]

    assert calc_total(items) == 0.1 * 3
    assert calc_total([]) == 0.0


def test_parse_sample_file():
    result = CartParser().parse(str(SAMPLE_CSV))

    assert [(i.name, i.price, i.quantity) for i in result.items] == [
        ("Mollis consequat", 9.00, 2),
        ("Tvoluptatem", 10.32, 1),
        ("Scelerisque lacinia", 18.90, 1),
        ("Consectetur adipiscing", 28.72, 10),
        ("Condimentum aliquet", 13.90, 1),
    ]
    assert all(item.id for item in result.items)
    assert result.total == pytest.approx(348.32)


def test_result_to_dict():
    result = CartResult(items=[CartItem(id="x", name="Pen", price=2.0, quantity=1.0)], total=2.0)

    assert result.to_dict() == {
        "items": [{"id": "x", "name": "Pen", "price": 2.0, "quantity": 1.0}],
        "total": 2.0,
    }
