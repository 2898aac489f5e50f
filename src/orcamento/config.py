from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, fields
from pathlib import Path

import platformdirs
import yaml
from dotenv import load_dotenv

APP_NAME = "orcamento-manutencao"

CATALOG_KEY = "svc:list"
BUDGET_KEY = "orcamento:itens"
GENERAL_KEY = "orcamento:geral"

CSV_MODEL_NAME = "modelo-servicos.csv"


def _resolve_config_dir_for_dotenv() -> Path | None:
    """Resolve config dir for .env loading without depending on env vars from .env itself.

    Returns None if only platformdirs would resolve and that dir does not exist yet.
    """
    from_env = os.environ.get("ORCAMENTO_CONFIG_DIR")
    if from_env:
        return Path(from_env)
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / "config"
    if candidate.is_dir():
        return candidate
    pd = Path(platformdirs.user_config_dir(APP_NAME))
    if pd.is_dir():
        return pd
    return None


# Load .env: cwd first (highest priority), then config dir (won't override)
load_dotenv()
_cfg_dir = _resolve_config_dir_for_dotenv()
if _cfg_dir is not None:
    load_dotenv(_cfg_dir / ".env")


def _resolve_dir(env_var: str, default_subdir: str, kind: str) -> Path:
    """Resolve a directory from env var, repo layout, or platform default.

    Priority: 1) env var, 2) dev repo layout, 3) platformdirs user directory.
    """
    from_env = os.environ.get(env_var)
    if from_env:
        return Path(from_env)
    # Development layout: src/orcamento/config.py -> ../../.. = project root
    project_root = Path(__file__).resolve().parent.parent.parent
    candidate = project_root / default_subdir
    if candidate.is_dir():
        return candidate
    if kind == "config":
        return Path(platformdirs.user_config_dir(APP_NAME))
    return Path(platformdirs.user_data_dir(APP_NAME))


def get_config_dir() -> Path:
    """Resolve config directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir("ORCAMENTO_CONFIG_DIR", "config", kind="config")


def get_data_dir() -> Path:
    """Resolve data directory. Re-evaluated on each call to pick up env changes."""
    return _resolve_dir("ORCAMENTO_DATA_DIR", "data", kind="data")


def get_downloads_dir() -> Path:
    """Directory where exported CSV templates are written."""
    from_env = os.environ.get("ORCAMENTO_DOWNLOADS_DIR")
    if from_env:
        return Path(from_env)
    return Path(platformdirs.user_downloads_dir())


# --- Settings ---


@dataclass(frozen=True)
class Settings:
    validade_dias: int = 15
    notificacao_segundos: float = 1.5
    atraso_exclusao: float = 0.03
    atraso_restauracao: float = 0.05


def load_yaml(path: Path) -> dict:
    """Load and parse a YAML file, returning the top-level dict."""
    return yaml.safe_load(path.read_text()) or {}


def load_settings() -> Settings:
    """Load settings.yaml from the config dir, merged over the defaults.

    A missing or unreadable file yields the defaults. Values that cannot be
    coerced to the default's type are ignored.
    """
    path = get_config_dir() / "settings.yaml"
    if not path.is_file():
        return Settings()
    try:
        raw = load_yaml(path)
    except (OSError, yaml.YAMLError):
        logging.getLogger(__name__).warning("settings.yaml ilegível: %s", path, exc_info=True)
        return Settings()
    if not isinstance(raw, dict):
        return Settings()

    defaults = Settings()
    values = {}
    for f in fields(Settings):
        if f.name not in raw:
            continue
        kind = type(getattr(defaults, f.name))
        try:
            value = kind(raw[f.name])
        except (TypeError, ValueError, OverflowError):
            continue
        if not math.isfinite(value) or value < 0:
            continue
        values[f.name] = value
    return Settings(**values)


# --- Logging ---


def setup_logging() -> None:
    """Send log records to <data_dir>/orcamento.log; the terminal belongs to the TUI."""
    level_name = os.environ.get("ORCAMENTO_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    data_dir = get_data_dir()
    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(data_dir / "orcamento.log", encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("orcamento")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
