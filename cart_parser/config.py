from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os
import yaml


@dataclass(frozen=True)
class Settings:
    # Input
    csv_path: str = "samples/cart.csv"

    # Logging
    log_dir: str = "./logs"
    log_level: str = "INFO"

    # Reports
    report_dir: str = "./reports"
    report_items_limit: int = 200


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


ENV_NAMES = {
    "csv_path": "CART_PARSER_CSV_PATH",
    "log_dir": "CART_PARSER_LOG_DIR",
    "log_level": "CART_PARSER_LOG_LEVEL",
    "report_dir": "CART_PARSER_REPORT_DIR",
    "report_items_limit": "CART_PARSER_REPORT_ITEMS_LIMIT",
}


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return None
    return v.strip()


def load_settings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    merged = {
        "csv_path": cfg.get("csv_path", defaults.csv_path),
        "log_dir": cfg.get("log_dir", defaults.log_dir),
        "log_level": cfg.get("log_level", defaults.log_level),
        "report_dir": cfg.get("report_dir", defaults.report_dir),
        "report_items_limit": cfg.get("report_items_limit", defaults.report_items_limit),
    }

    # 2) env
    env = {key: _env_get(name) for key, name in ENV_NAMES.items()}
    if any(v is not None for v in env.values()):
        sources.append("env")

    for key, value in env.items():
        if value is None:
            continue
        merged[key] = int(value) if key == "report_items_limit" else value

    # 3) CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    settings = Settings(
        csv_path=str(merged["csv_path"]),
        log_dir=str(merged["log_dir"]),
        log_level=str(merged["log_level"]),
        report_dir=str(merged["report_dir"]),
        report_items_limit=int(merged["report_items_limit"]),
    )
    return LoadedSettings(settings=settings, sources_used=sources)
