from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import typer

from cart_parser.common.ids import generate_run_id
from cart_parser.common.time import getDurationMs
from cart_parser.config import Settings, load_settings
from cart_parser.domain.error_codes import ErrorCode
from cart_parser.domain.exceptions import ValidationFailed
from cart_parser.domain.validation.cell_rules import split_lines
from cart_parser.domain.validation.validator import CartValidator
from cart_parser.infra.artifacts.report_writer import (
    Report,
    addValidationErrors,
    createEmptyReport,
    finalizeReport,
    writeReportJson,
)
from cart_parser.infra.logging.setup import (
    closeCommandLogger,
    createCommandLogger,
    logEvent,
    logValidationErrors,
    mapLogLevel,
)
from cart_parser.infra.sources.file_reader import TextFileReader
from cart_parser.usecases.parse_usecase import CartParser

app = typer.Typer(no_args_is_help=True, add_completion=False)


def ensureDir(path: str) -> None:
    Path(path).mkdir(parents=True, exist_ok=True)


def printRunHeader(runId: str, command: str, settings: Settings, sources: list[str], csvPath: str) -> None:
    """
    Назначение:
        Печатает сводку параметров запуска.
    """
    typer.echo(
        f"run_id={runId} command={command} csv={csvPath} "
        f"sources={sources} log_level={settings.log_level}"
    )


def echoValidationErrors(errors) -> None:
    for error in errors:
        typer.echo(
            f"{error.kind.value} row={error.row_index} column={error.column_index}: {error.message}",
            err=True,
        )


def runWithReport(ctx: typer.Context, commandName: str, csvPath: str, runner) -> None:
    """
    Назначение:
        Общая обвязка команд:
        - создаёт логгер и файл лога
        - создаёт скелет report.json
        - в finally пишет отчёт и завершает процесс с кодом runner'а

    Входные данные:
        runner: Callable[[logging.Logger, Report], int]
            Тело команды, возвращает exit code.
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    sources = ctx.obj["sources"]

    startMonotonic = time.monotonic()

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )

    report = createEmptyReport(runId=runId, command=commandName, configSources=sources)
    report.meta.csv_path = csvPath

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")
        printRunHeader(runId, commandName, settings, sources, csvPath)
        exitCode = runner(logger, report)
    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath, reportDir=settings.report_dir)
        reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
        logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")

        closeCommandLogger(logger)

        if exitCode is not None:
            raise typer.Exit(code=exitCode)


def failOnReadError(logger: logging.Logger, runId: str, report: Report, exc: OSError) -> int:
    logEvent(logger, logging.ERROR, runId, "csv", f"CSV read error: {exc}")
    report.summary.status = "failed"
    report.summary.error_code = ErrorCode.SOURCE_READ_ERROR.value
    typer.echo(f"ERROR: CSV read error: {exc}", err=True)
    return 2


def runValidateCommand(ctx: typer.Context, csvPath: str) -> None:
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]

    def execute(logger: logging.Logger, report: Report) -> int:
        try:
            contents = TextFileReader().read_text(csvPath)
        except OSError as exc:
            return failOnReadError(logger, runId, report, exc)

        errors = CartValidator().validate(contents)
        report.meta.csv_rows_total = max(len(split_lines(contents)) - 1, 0)
        addValidationErrors(report, errors, settings.report_items_limit)

        if errors:
            logValidationErrors(logger, runId, "validate", errors)
            echoValidationErrors(errors)
            report.summary.status = "invalid"
            report.summary.error_code = ErrorCode.VALIDATION_FAILED.value
            logEvent(logger, logging.INFO, runId, "validate", f"validate done errors={len(errors)}")
            return 1

        report.summary.status = "valid"
        logEvent(logger, logging.INFO, runId, "validate", "validate done errors=0")
        typer.echo("OK: no validation errors")
        return 0

    runWithReport(ctx=ctx, commandName="validate", csvPath=csvPath, runner=execute)


def runParseCommand(ctx: typer.Context, csvPath: str, outputPath: str | None) -> None:
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]

    def execute(logger: logging.Logger, report: Report) -> int:
        parser = CartParser(default_path=settings.csv_path, logger=logger, run_id=runId)
        try:
            result = parser.parse(csvPath)
        except OSError as exc:
            return failOnReadError(logger, runId, report, exc)
        except ValidationFailed as exc:
            addValidationErrors(report, exc.errors, settings.report_items_limit)
            report.summary.status = "invalid"
            report.summary.error_code = exc.code.value
            echoValidationErrors(exc.errors)
            typer.echo(f"ERROR: {exc}", err=True)
            return 1

        payload = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
        if outputPath:
            Path(outputPath).parent.mkdir(parents=True, exist_ok=True)
            Path(outputPath).write_text(payload, encoding="utf-8")
        report.meta.csv_rows_total = len(result.items)
        report.summary.status = "parsed"
        report.summary.items = len(result.items)
        report.summary.total = result.total
        typer.echo(payload)
        return 0

    runWithReport(ctx=ctx, commandName="parse", csvPath=csvPath, runner=execute)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports."),
    reportItemsLimit: int | None = typer.Option(None, "--report-items-limit", help="Limit report items stored"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - создаёт каталоги log/report
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "report_items_limit": reportItemsLimit,
    }
    try:
        loaded = load_settings(config_path=config, cli_overrides=cliOverrides)
        mapLogLevel(loaded.settings.log_level)
    except ValueError as exc:
        typer.echo(f"ERROR: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)
    ensureDir(loaded.settings.report_dir)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
    }


@app.command()
def validate(
    ctx: typer.Context,
    csv: str | None = typer.Option(None, "--csv", help="Path to cart CSV (default: settings csv_path)"),
):
    """Validate a cart CSV and list every header/row/cell error."""
    runValidateCommand(ctx, csv or ctx.obj["settings"].csv_path)


@app.command()
def parse(
    ctx: typer.Context,
    csv: str | None = typer.Option(None, "--csv", help="Path to cart CSV (default: settings csv_path)"),
    output: str | None = typer.Option(None, "--output", help="Also write the parsed cart JSON to this file"),
):
    """Parse a cart CSV into items with ids and the total."""
    runParseCommand(ctx, csv or ctx.obj["settings"].csv_path, output)
