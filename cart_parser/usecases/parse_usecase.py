from __future__ import annotations

import logging
from typing import Callable, Iterable

from cart_parser.common.ids import generate_item_id
from cart_parser.domain.error_codes import ErrorType
from cart_parser.domain.exceptions import ValidationFailed
from cart_parser.domain.models import CartItem, CartLine, CartResult, ValidationErrorItem, create_error
from cart_parser.domain.parsing.line_parser import LineParser
from cart_parser.domain.ports.sources import TextSource
from cart_parser.domain.validation.cell_rules import split_lines
from cart_parser.domain.validation.validator import CartValidator
from cart_parser.infra.logging.setup import logEvent, logValidationErrors
from cart_parser.infra.sources.file_reader import TextFileReader

DEFAULT_CSV_PATH = "samples/cart.csv"


def calc_total(items: Iterable[CartItem]) -> float:
    """
    Назначение:
        Сумма price * quantity по позициям, без округления.
    """
    total = 0.0
    for item in items:
        total += item.price * item.quantity
    return total


class CartParser:
    """
    Назначение/ответственность:
        Use-case разбора CSV корзины: read -> validate -> parse lines -> total.

    Взаимодействия:
        - TextSource читает файл; OSError пробрасывается без обёртки.
        - CartValidator копит ошибки; при непустом списке бросается ValidationFailed.
        - LineParser вызывается только для строк уже провалидированного текста.

    Гарантии:
        - Частичный результат не возвращается.
        - Состояние между вызовами parse не сохраняется.
    """

    def __init__(
        self,
        reader: TextSource | None = None,
        validator: CartValidator | None = None,
        line_parser: LineParser | None = None,
        id_factory: Callable[[], str] = generate_item_id,
        default_path: str = DEFAULT_CSV_PATH,
        logger: logging.Logger | None = None,
        run_id: str | None = None,
    ) -> None:
        self.reader = reader or TextFileReader()
        self.validator = validator or CartValidator()
        self.line_parser = line_parser or LineParser()
        self.id_factory = id_factory
        self.default_path = default_path
        self.logger = logger or logging.getLogger(__name__)
        self.run_id = run_id

    def read_file(self, path: str) -> str:
        return self.reader.read_text(path)

    def validate(self, contents: str) -> list[ValidationErrorItem]:
        return self.validator.validate(contents)

    def parse_line(self, line: str) -> CartLine:
        return self.line_parser.parse_line(line)

    def create_error(self, kind: ErrorType | str, row_index: int, column_index: int, message: str) -> ValidationErrorItem:
        return create_error(kind, row_index, column_index, message)

    def calc_total(self, items: Iterable[CartItem]) -> float:
        return calc_total(items)

    def parse(self, source_path: str | None = None) -> CartResult:
        path = source_path if source_path is not None else self.default_path
        contents = self.read_file(path)

        errors = self.validate(contents)
        if errors:
            logValidationErrors(self.logger, self.run_id, "validate", errors)
            logEvent(
                self.logger,
                logging.ERROR,
                self.run_id,
                "parse",
                f"validation failed path={path} errors={len(errors)}",
            )
            raise ValidationFailed(errors=errors, source_path=path)

        items = [
            CartItem.from_line(self.parse_line(line), self.id_factory())
            for line in split_lines(contents)[1:]
        ]
        total = self.calc_total(items)
        logEvent(
            self.logger,
            logging.INFO,
            self.run_id,
            "parse",
            f"parse done path={path} items={len(items)} total={total}",
        )
        return CartResult(items=items, total=total)
