from __future__ import annotations

import json
import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_PATH = Path("~/.config/accordion-store/config.json").expanduser()

CONFIG_ENV_OVERRIDES = {
    "api_url": "ACCORDION_API_URL",
    "request_timeout_s": "ACCORDION_REQUEST_TIMEOUT_S",
    "max_pinned": "ACCORDION_MAX_PINNED",
    "repair_orphans": "ACCORDION_REPAIR_ORPHANS",
    "default_author_color": "ACCORDION_DEFAULT_COLOR",
}


def get_config_path(path: Path | None = None) -> Path:
    candidate = path or Path(os.getenv("ACCORDION_CONFIG", DEFAULT_CONFIG_PATH))
    return candidate.expanduser()


def read_config_file(path: Path | None = None) -> dict[str, Any]:
    config_path = get_config_path(path)
    if not config_path.exists():
        return {}
    raw = config_path.read_text()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid config json") from exc
    if not isinstance(data, dict):
        raise ValueError("config must be an object")
    return data


def write_config_file(data: dict[str, Any], path: Path | None = None) -> Path:
    config_path = get_config_path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return config_path


def get_env_overrides() -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, env_var in CONFIG_ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value is not None:
            overrides[key] = value
    return overrides


@dataclass
class AccordionConfig:
    api_url: str = "http://localhost:3001"
    request_timeout_s: float = 5.0
    max_pinned: int = 3

    # When disabled, orphaned accordions are hidden and reported but left on the server.
    repair_orphans: bool = True
    default_author_color: str = "#3b82f6"


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    if value.lower() in {"1", "true", "yes", "on"}:
        return True
    if value.lower() in {"0", "false", "off", "no"}:
        return False
    return default


def _parse_int(value: object, default: int, *, key: str, minimum: int = 1) -> int:
    if value is None:
        return default
    try:
        parsed = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default
    if parsed < minimum:
        warnings.warn(f"Invalid int for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default
    return parsed


def _parse_float(value: object, default: float, *, key: str) -> float:
    if value is None:
        return default
    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        warnings.warn(f"Invalid float for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default
    if parsed <= 0:
        warnings.warn(f"Invalid float for {key}: {value!r}", RuntimeWarning, stacklevel=2)
        return default
    return parsed


def _coerce_bool(value: object, default: bool, *, key: str) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return _parse_bool(value, default)
    warnings.warn(f"Invalid bool for {key}: {value!r}", RuntimeWarning, stacklevel=2)
    return default


def load_config(path: Path | None = None) -> AccordionConfig:
    cfg = AccordionConfig()
    config_path = get_config_path(path)
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
        except json.JSONDecodeError:
            data = {}
        if isinstance(data, dict):
            cfg = _apply_dict(cfg, data)
    cfg = _apply_env(cfg)
    return cfg


def _apply_dict(cfg: AccordionConfig, data: dict[str, Any]) -> AccordionConfig:
    for key, value in data.items():
        if not hasattr(cfg, key):
            continue
        if key == "max_pinned":
            setattr(cfg, key, _parse_int(value, getattr(cfg, key), key=key))
            continue
        if key == "request_timeout_s":
            setattr(cfg, key, _parse_float(value, getattr(cfg, key), key=key))
            continue
        if key == "repair_orphans":
            setattr(cfg, key, _coerce_bool(value, getattr(cfg, key), key=key))
            continue
        setattr(cfg, key, value)
    return cfg


def _apply_env(cfg: AccordionConfig) -> AccordionConfig:
    cfg.api_url = os.getenv("ACCORDION_API_URL", cfg.api_url)
    cfg.request_timeout_s = _parse_float(
        os.getenv("ACCORDION_REQUEST_TIMEOUT_S"),
        cfg.request_timeout_s,
        key="request_timeout_s",
    )
    cfg.max_pinned = _parse_int(os.getenv("ACCORDION_MAX_PINNED"), cfg.max_pinned, key="max_pinned")
    cfg.repair_orphans = _parse_bool(os.getenv("ACCORDION_REPAIR_ORPHANS"), cfg.repair_orphans)
    cfg.default_author_color = os.getenv("ACCORDION_DEFAULT_COLOR", cfg.default_author_color)
    return cfg
