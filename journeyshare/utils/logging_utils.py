"""Logging utilities for JourneyShare.

The extension-side and application-side entry points both call
configure_logging() once at startup, so a shared store and its handoff can be
traced from either process. All loggers live under 'journeyshare'.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.defaults import DEFAULT_LOG_LEVEL

DEFAULT_LOGGING_CONFIG = Path(__file__).resolve().parents[2] / "config" / "logging.yaml"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _level_name(log_level: Optional[str]) -> str:
    level = (log_level or DEFAULT_LOG_LEVEL).upper()
    return level if level in _LEVELS else DEFAULT_LOG_LEVEL


def _load_yaml_config(path: Path) -> Optional[Dict[str, Any]]:
    """Read a dictConfig mapping, or None if the file is missing or unusable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return None
    return cfg if isinstance(cfg, dict) else None


def _apply_overrides(cfg: Dict[str, Any], level: str, log_file: Optional[str]) -> Dict[str, Any]:
    if log_file:
        for handler_cfg in cfg.get("handlers", {}).values():
            if handler_cfg.get("class") == "logging.FileHandler":
                handler_cfg["filename"] = log_file

    for logger_cfg in cfg.get("loggers", {}).values():
        logger_cfg["level"] = level
    if "root" in cfg:
        cfg["root"]["level"] = level
    return cfg


def configure_logging(
    config_path: Optional[str] = None,
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """Configure logging from config/logging.yaml.

    Falls back to basicConfig when the YAML file is missing, unreadable or not
    a mapping. An unknown log level is replaced by the default level.

    Args:
        config_path: Path to a logging YAML file (defaults to config/logging.yaml).
        log_level: Level applied to every configured logger, e.g. "DEBUG".
        log_file: Override the file handler's path.
    """
    level = _level_name(log_level)
    cfg = _load_yaml_config(Path(config_path) if config_path else DEFAULT_LOGGING_CONFIG)

    if cfg is None:
        logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
        return

    logging.config.dictConfig(_apply_overrides(cfg, level, log_file))


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the 'journeyshare' namespace.

    Scripts outside the package use this so their records go through the
    same handlers as the library, e.g. get_logger("cli").
    """
    if name == "journeyshare" or name.startswith("journeyshare."):
        return logging.getLogger(name)
    return logging.getLogger(f"journeyshare.{name}")
