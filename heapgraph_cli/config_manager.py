"""Configuration manager for HeapGraph using TOML files."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import toml

from . import config

logger = logging.getLogger(__name__)


def default_report_config() -> Dict[str, Any]:
    return {"rows": config.DEFAULT_ROWS, "pretty": config.DEFAULT_PRETTY}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections)."""
    if not config.CONFIG_FILE.exists():
        return {}
    try:
        with open(config.CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", config.CONFIG_FILE, exc)
        return {}


def _save_full_config(payload: Dict[str, Any]) -> None:
    config.CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    with open(config.CONFIG_FILE, "w", encoding="utf-8") as f:
        toml.dump(payload, f)


def load_report_config() -> Dict[str, Any]:
    """Load the ``[report]`` section merged over the defaults.

    Returns:
        Dict with ``rows`` (positive int) and ``pretty`` (bool).
    """
    merged = default_report_config()
    section = load_full_config().get("report", {})
    if not isinstance(section, dict):
        logger.warning("Ignoring malformed [report] section in %s", config.CONFIG_FILE)
        return merged

    rows = section.get("rows")
    if rows is not None:
        if isinstance(rows, int) and not isinstance(rows, bool) and rows > 0:
            merged["rows"] = rows
        else:
            logger.warning("Ignoring invalid report.rows=%r", rows)

    pretty = section.get("pretty")
    if pretty is not None:
        if isinstance(pretty, bool):
            merged["pretty"] = pretty
        else:
            logger.warning("Ignoring invalid report.pretty=%r", pretty)
    return merged


def save_report_config(rows: Optional[int] = None, pretty: Optional[bool] = None) -> Dict[str, Any]:
    """Update the ``[report]`` section, preserving other sections.

    Returns:
        The effective report configuration after saving.
    """
    if rows is not None and rows <= 0:
        raise ValueError("rows must be greater than zero")
    payload = load_full_config()
    section = dict(payload.get("report", {})) if isinstance(payload.get("report"), dict) else {}
    if rows is not None:
        section["rows"] = rows
    if pretty is not None:
        section["pretty"] = pretty
    payload["report"] = section
    _save_full_config(payload)
    return load_report_config()


def clear_report_config() -> None:
    """Remove the ``[report]`` section, resetting to defaults."""
    payload = load_full_config()
    if payload.pop("report", None) is not None:
        _save_full_config(payload)
