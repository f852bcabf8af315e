from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Callable

from cart_parser.domain.schema import ColumnType

NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")
LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """
    Назначение:
        Делит текст на строки (\n или \r\n) и тримит их.

    Поведение:
        - Отбрасываются только строки нулевой длины.
        - Строка из одних пробелов остаётся и далее даёт одну пустую ячейку.
    """
    return [line.strip() for line in LINE_BREAK_RE.split(text) if line]


def split_cells(line: str) -> list[str]:
    """
    Назначение:
        Делит строку CSV по запятым и тримит ячейки.
        Пустая ячейка от завершающей запятой отбрасывается.
    """
    trimmed = line.strip()
    cells = [cell.strip() for cell in trimmed.split(",")]
    if trimmed.endswith(","):
        cells.pop()
    return cells


def to_number(value: str) -> float:
    """
    Назначение:
        Нестрогое приведение текста к числу.

    Выходные данные:
        float
            Значение числа либо math.nan, если текст не является десятичным литералом.
    """
    text = value.strip()
    if not NUMBER_RE.match(text):
        return math.nan
    return float(text)


def is_nonempty_string(value: str) -> bool:
    return value.strip() != ""


def is_positive_number(value: str) -> bool:
    number = to_number(value)
    return math.isfinite(number) and number >= 0


def _pass_through(value: str) -> str:
    return value


@dataclass(frozen=True)
class CellRule:
    """
    Назначение:
        Правило для типа колонки: проверка ячейки и приведение значения.

    Контракт:
        - check(raw) -> True, если ячейка валидна.
        - convert(raw) -> значение для CartLine (без валидации).
        - error_message(raw) -> текст ошибки для невалидной ячейки.
    """

    type: ColumnType
    check: Callable[[str], bool]
    convert: Callable[[str], Any]
    message_template: str

    def error_message(self, value: str) -> str:
        return self.message_template.format(value=value)


CELL_RULES: dict[ColumnType, CellRule] = {
    ColumnType.STRING: CellRule(
        type=ColumnType.STRING,
        check=is_nonempty_string,
        convert=_pass_through,
        message_template='Expected cell to be a nonempty string but received "{value}".',
    ),
    ColumnType.NUMBER_POSITIVE: CellRule(
        type=ColumnType.NUMBER_POSITIVE,
        check=is_positive_number,
        convert=to_number,
        message_template='Expected cell to be a positive number but received "{value}".',
    ),
}


def get_cell_rule(column_type: ColumnType) -> CellRule:
    return CELL_RULES[column_type]
