from __future__ import annotations

from cart_parser.domain.error_codes import ErrorType
from cart_parser.domain.models import ValidationErrorItem, create_error
from cart_parser.domain.schema import CART_SCHEMA, CartSchema
from cart_parser.domain.validation.cell_rules import get_cell_rule, split_cells, split_lines


class CartValidator:
    """
    Назначение/ответственность:
        Проверяет текст CSV корзины по схеме: заголовок, длину строк и ячейки.

    Взаимодействия:
        - Использует CartSchema и CELL_RULES.
        - Не бросает исключений на невалидных данных, только копит ошибки.

    Порядок ошибок:
        заголовок, затем по каждой строке данных: длина строки, ячейки по колонкам.
    """

    def __init__(self, schema: CartSchema = CART_SCHEMA) -> None:
        self.schema = schema

    def validate(self, contents: str) -> list[ValidationErrorItem]:
        errors: list[ValidationErrorItem] = []
        lines = split_lines(contents)
        header = split_cells(lines[0]) if lines else []
        self._validate_header(header, errors)
        for row_index, line in enumerate(lines[1:], start=1):
            self._validate_row(row_index, split_cells(line), errors)
        return errors

    def _validate_header(self, header: list[str], errors: list[ValidationErrorItem]) -> None:
        for column_index, column in enumerate(self.schema.columns):
            received = header[column_index] if column_index < len(header) else ""
            if received != column.name:
                errors.append(
                    create_error(
                        ErrorType.HEADER,
                        0,
                        column_index,
                        f'Expected header to be named "{column.name}" but received {received}.',
                    )
                )

    def _validate_row(self, row_index: int, cells: list[str], errors: list[ValidationErrorItem]) -> None:
        expected = self.schema.column_count
        if len(cells) != expected:
            errors.append(
                create_error(
                    ErrorType.ROW,
                    row_index,
                    -1,
                    f"Expected row to have {expected} cells but received {len(cells)}.",
                )
            )
            return
        for column_index, column in enumerate(self.schema.columns):
            rule = get_cell_rule(column.type)
            value = cells[column_index]
            if not rule.check(value):
                errors.append(create_error(ErrorType.CELL, row_index, column_index, rule.error_message(value)))
