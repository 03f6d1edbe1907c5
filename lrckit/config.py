from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lrckit.errors import ConfigError
from lrckit.lrc.finalize import DEFAULT_FALLBACK_SPAN_MS

logger = logging.getLogger(__name__)

GRAMMARS = ("standard", "enhanced")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lrckit"
    return Path.home() / ".config" / "lrckit"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Parsing
    grammar: str
    fallback_span_ms: int  # end of a trailing line with nothing to infer from
    duration_hint_ms: int  # 0 = unknown


def load_config() -> AppConfig:
    # Priority: config.json → LRCKIT_* env → defaults
    config_dir = _config_dir()
    file_values = _load_file(config_dir / "config.json")

    grammar = str(_pick(file_values, "grammar", "LRCKIT_GRAMMAR", "standard")).lower()
    if grammar not in GRAMMARS:
        raise ConfigError(f"grammar must be one of: {', '.join(GRAMMARS)} (got {grammar!r})")

    fallback_span_ms = _as_int(
        _pick(file_values, "fallback_span_ms", "LRCKIT_FALLBACK_SPAN_MS", DEFAULT_FALLBACK_SPAN_MS),
        "fallback_span_ms",
    )
    if fallback_span_ms <= 0:
        raise ConfigError(f"fallback_span_ms must be positive (got {fallback_span_ms})")

    duration_hint_ms = _as_int(
        _pick(file_values, "duration_hint_ms", "LRCKIT_DURATION_HINT_MS", 0),
        "duration_hint_ms",
    )

    return AppConfig(
        config_dir=config_dir,
        grammar=grammar,
        fallback_span_ms=fallback_span_ms,
        duration_hint_ms=max(duration_hint_ms, 0),
    )


def _load_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    logger.debug("Loaded config from %s", path)
    return data


def _pick(file_values: dict[str, Any], key: str, env: str, default: Any) -> Any:
    if file_values.get(key) is not None:
        return file_values[key]
    return os.getenv(env) or default


def _as_int(value: Any, name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer (got {value!r})") from e


def save_config(**values: Any) -> None:
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {}
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Overwriting unreadable config file %s", cfg_path)
    data.update(values)
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
