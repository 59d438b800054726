from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Config

ENV_PREFIX = "STACKLAB"

DEFAULTS = {
    "MAX_STACKS": 100,
    "UNDO_LIMIT": 50,
    "LOG_LEVEL": "INFO",
}


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> Config:
    """
    設定の読み込み
    優先順位: overrides > 環境変数（STACKLAB_*） > DEFAULTS

    環境変数の値は JSON として解釈される（STACKLAB_MAX_STACKS=10 → 10）
    """
    config = Config(root_path=".")
    config.from_mapping(DEFAULTS)
    config.from_prefixed_env(ENV_PREFIX)
    if overrides:
        config.from_mapping(overrides)
    validate(config)
    return config


def log_level(value: Any) -> int:
    """
    LOG_LEVEL を数値に変換する
    "debug" / "INFO" のような名前と、10 / 20 のような数値のどちらも受け付ける
    """
    if isinstance(value, bool):
        raise ValueError(f"unknown LOG_LEVEL: {value!r}")
    if isinstance(value, int):
        # 未登録の数値は "Level 15" のような名前になる
        if logging.getLevelName(value).startswith("Level "):
            raise ValueError(f"unknown LOG_LEVEL: {value!r}")
        return value

    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown LOG_LEVEL: {value!r}")
    return level


def validate(config: Mapping[str, Any]) -> None:
    for key in ("MAX_STACKS", "UNDO_LIMIT"):
        value = config[key]
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{key} must be a positive integer, got {value!r}")

    log_level(config["LOG_LEVEL"])
