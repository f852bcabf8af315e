from __future__ import annotations

from enum import Enum


class ErrorType(str, Enum):
    """
    Назначение:
        Вид ошибки валидации CSV корзины.
    """

    HEADER = "header"
    ROW = "row"
    CELL = "cell"


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов ошибок для CLI и отчёта.
    """

    VALIDATION_FAILED = "VALIDATION_FAILED"
    SOURCE_READ_ERROR = "SOURCE_READ_ERROR"

