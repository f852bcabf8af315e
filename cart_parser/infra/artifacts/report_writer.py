from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from cart_parser.common.time import getNowIso
from cart_parser.domain.models import ValidationErrorItem


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные запуска команды.
    """
    run_id: str
    command: str
    started_at: str
    finished_at: str | None = None
    duration_ms: int | None = None
    csv_path: str | None = None
    csv_rows_total: int | None = None
    log_file: str | None = None
    report_dir: str | None = None
    report_items_limit: int | None = None
    items_truncated: bool = False
    config_sources: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    status: str = "pending"
    error_code: str | None = None
    errors: int = 0
    items: int = 0
    total: float | None = None


@dataclass
class Report:
    """
    Назначение:
        Корневой объект отчёта.

    Поля:
        meta: ReportMeta
        summary: ReportSummary
        items: list[dict]
            Ошибки валидации (ограничены report_items_limit).
    """
    meta: ReportMeta
    summary: ReportSummary
    items: list[dict] = field(default_factory=list)


def createEmptyReport(runId: str, command: str, configSources: list[str]) -> Report:
    meta = ReportMeta(
        run_id=runId,
        command=command,
        started_at=getNowIso(),
        config_sources=configSources or [],
    )
    return Report(meta=meta, summary=ReportSummary())


def addValidationErrors(report: Report, errors: list[ValidationErrorItem], limit: int) -> None:
    """
    Назначение:
        Кладёт ошибки валидации в report.items, не больше limit штук.
        При усечении выставляет meta.items_truncated.
    """
    report.summary.errors = len(errors)
    report.meta.report_items_limit = limit
    for error in errors:
        if len(report.items) >= limit:
            report.meta.items_truncated = True
            break
        report.items.append(error.to_dict())


def finalizeReport(report: Report, durationMs: int, logFile: str | None, reportDir: str) -> None:
    report.meta.finished_at = getNowIso()
    report.meta.duration_ms = durationMs
    report.meta.log_file = logFile
    report.meta.report_dir = reportDir


def writeReportJson(report: Report, reportDir: str, fileBaseName: str) -> str:
    """
    Назначение:
        Записывает report.json на диск.

    Выходные данные:
        str
            Путь к файлу отчёта, например reports/report_validate_<runId>.json.
    """
    Path(reportDir).mkdir(parents=True, exist_ok=True)
    reportPath = str(Path(reportDir) / f"{fileBaseName}.json")

    data: dict[str, Any] = {
        "meta": asdict(report.meta),
        "summary": asdict(report.summary),
        "items": report.items,
    }

    with open(reportPath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return reportPath
