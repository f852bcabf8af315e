from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ColumnType(str, Enum):
    """
    Назначение:
        Правило типа колонки CSV.
    """

    STRING = "string"
    NUMBER_POSITIVE = "number_positive"


@dataclass(frozen=True)
class ColumnRule:
    """
    Назначение:
        Описание ожидаемой колонки: имя в заголовке, тип и атрибут результата.
    """

    name: str
    type: ColumnType
    attr: str


@dataclass(frozen=True)
class CartSchema:
    """
    Назначение/ответственность:
        Статическая схема CSV корзины. Порядок колонок совпадает с индексами в файле.
    """

    columns: tuple[ColumnRule, ...]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def header_names(self) -> tuple[str, ...]:
        return tuple(column.name for column in self.columns)


CART_SCHEMA = CartSchema(
    columns=(
        ColumnRule("Product name", ColumnType.STRING, "name"),
        ColumnRule("Price", ColumnType.NUMBER_POSITIVE, "price"),
        ColumnRule("Quantity", ColumnType.NUMBER_POSITIVE, "quantity"),
    )
)
