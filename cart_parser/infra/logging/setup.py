from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from cart_parser.domain.models import ValidationErrorItem

LOG_FORMAT = "%(asctime)s %(levelname)s runId=%(runId)s comp=%(component)s msg=%(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class EnsureFieldsFilter(logging.Filter):
    """
    Назначение:
        Подставляет runId и component в LogRecord, если их не передали через extra.
        Записи из сторонних логгеров иначе ломают форматтер.
    """

    def __init__(self, runId: str, defaultComponent: str = "core"):
        super().__init__()
        self.runId = runId
        self.defaultComponent = defaultComponent

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "runId"):
            record.runId = self.runId
        if not hasattr(record, "component"):
            record.component = self.defaultComponent
        return True


def mapLogLevel(levelName: str) -> int:
    """
    Назначение:
        ERROR|WARN|INFO|DEBUG -> logging level. Иное значение -> ValueError.
    """
    value = (levelName or "").strip().upper()
    if value == "ERROR":
        return logging.ERROR
    if value == "WARN":
        return logging.WARNING
    if value == "INFO":
        return logging.INFO
    if value == "DEBUG":
        return logging.DEBUG
    raise ValueError(f"Unsupported log level: {levelName}")


def createCommandLogger(commandName: str, logDir: str, runId: str, logLevel: str) -> tuple[logging.Logger, str]:
    """
    Назначение:
        Создаёт изолированный логгер команды с файлом <command>_<runId>.log.

    Выходные данные:
        (logger, logFilePath)
    """
    Path(logDir).mkdir(parents=True, exist_ok=True)
    logFilePath = str(Path(logDir) / f"{commandName}_{runId}.log")

    logger = logging.getLogger(f"cartParser.{commandName}.{runId}")
    logger.handlers.clear()
    logger.propagate = False

    level = mapLogLevel(logLevel)
    logger.setLevel(level)

    fileHandler = logging.FileHandler(logFilePath, encoding="utf-8")
    fileHandler.setLevel(level)
    fileHandler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    fileHandler.addFilter(EnsureFieldsFilter(runId=runId))
    logger.addHandler(fileHandler)

    return logger, logFilePath


def closeCommandLogger(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def logEvent(logger: logging.Logger, level: int, runId: str | None, component: str, message: str) -> None:
    """
    Назначение:
        Единая точка записи событий с runId/component.
    """
    extra = {"component": component}
    if runId is not None:
        extra["runId"] = runId
    logger.log(level, message, extra=extra)


def logValidationErrors(
    logger: logging.Logger,
    runId: str | None,
    component: str,
    errors: Iterable[ValidationErrorItem],
) -> None:
    """
    Логирует каждую ошибку валидации CSV отдельной записью WARNING.
    """
    for error in errors:
        logEvent(
            logger,
            logging.WARNING,
            runId,
            component,
            f"invalid {error.kind.value} row={error.row_index} column={error.column_index} {error.message}",
        )
