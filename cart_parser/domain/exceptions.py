from __future__ import annotations

from dataclasses import dataclass, field

from cart_parser.domain.error_codes import ErrorCode
from cart_parser.domain.models import ValidationErrorItem

VALIDATION_FAILED_MESSAGE = "Validation failed!"


@dataclass
class ValidationFailed(Exception):
    """
    Назначение:
        Ошибка прикладного уровня: CSV не прошёл валидацию, результат не формируется.
    Инварианты/гарантии:
        - code установлен в ErrorCode.VALIDATION_FAILED.
        - str(exc) всегда "Validation failed!", полный список ошибок лежит в errors.
    """

    errors: list[ValidationErrorItem] = field(default_factory=list)
    source_path: str | None = None

    def __post_init__(self) -> None:
        super().__init__(VALIDATION_FAILED_MESSAGE)

    @property
    def code(self) -> ErrorCode:
        return ErrorCode.VALIDATION_FAILED

    def __str__(self) -> str:
        return VALIDATION_FAILED_MESSAGE


__all__ = ["ValidationFailed", "VALIDATION_FAILED_MESSAGE"]
