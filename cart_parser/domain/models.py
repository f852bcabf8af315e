from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from cart_parser.domain.error_codes import ErrorType


@dataclass(frozen=True)
class ValidationErrorItem:
    """
    Назначение:
        Диагностическое сообщение валидации (заголовок/строка/ячейка).

    Инварианты:
        - row_index == 0 для заголовка, строки данных нумеруются с 1.
        - column_index == -1 для ошибок уровня строки.
        - Неизменяемый, сравнение структурное.
    """

    kind: ErrorType
    row_index: int
    column_index: int
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind.value,
            "row": self.row_index,
            "column": self.column_index,
            "message": self.message,
        }


def create_error(kind: ErrorType | str, row_index: int, column_index: int, message: str) -> ValidationErrorItem:
    """
    Назначение:
        Фабрика ValidationErrorItem; kind принимается строкой ("header"/"row"/"cell") или ErrorType.
    """
    return ValidationErrorItem(
        kind=ErrorType(kind),
        row_index=row_index,
        column_index=column_index,
        message=message,
    )


@dataclass
class CartLine:
    """
    Назначение:
        Результат разбора одной строки данных (ещё без id).
    """

    name: str
    price: float
    quantity: float


@dataclass
class CartItem:
    """
    Назначение:
        Позиция корзины с уникальным непрозрачным id.
    """

    id: str
    name: str
    price: float
    quantity: float

    @classmethod
    def from_line(cls, line: CartLine, item_id: str) -> "CartItem":
        return cls(id=item_id, name=line.name, price=line.price, quantity=line.quantity)


@dataclass
class CartResult:
    """
    Назначение:
        Итог разбора CSV: позиции в порядке строк файла и сумма price * quantity.
    """

    items: list[CartItem] = field(default_factory=list)
    total: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "items": [asdict(item) for item in self.items],
            "total": self.total,
        }
