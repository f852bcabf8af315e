from __future__ import annotations

from cart_parser.domain.models import CartLine
from cart_parser.domain.schema import CART_SCHEMA, CartSchema
from cart_parser.domain.validation.cell_rules import get_cell_rule, split_cells


class LineParser:
    """
    Назначение/ответственность:
        Превращает одну строку данных CSV в CartLine по типам колонок схемы.

    Контракт:
        - Строку не валидирует: нечисловой текст в числовой колонке даёт nan.
        - Поля результата берутся из ColumnRule.attr, а не из текста заголовка.
    """

    def __init__(self, schema: CartSchema = CART_SCHEMA) -> None:
        self.schema = schema

    def parse_line(self, line: str) -> CartLine:
        cells = split_cells(line)
        values = {}
        for column_index, column in enumerate(self.schema.columns):
            raw = cells[column_index] if column_index < len(cells) else ""
            values[column.attr] = get_cell_rule(column.type).convert(raw)
        return CartLine(**values)
