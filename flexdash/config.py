"""Engine configuration.

Defaults live in DEFAULT_CONFIG; a YAML or JSON file can override any subset
of keys through load_config().
"""
import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "schema": {
        "sample_size": 10,
    },
    "dates": {
        # yy < pivot -> 20yy, otherwise 19yy
        "two_digit_year_pivot": 50,
    },
    "aggregation": {
        "default_granularity": "month",
        "top_categories": 20,
        "top_column_values": 20,
    },
    "filters": {
        "max_filter_options": 50,
    },
    "datasets": {
        "merged_color": "#6366f1",
        "preview_rows": 5,
    },
    "formatting": {
        "currency": "INR",
    },
    "logging": {
        "level": "INFO",
    },
}


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if not config_path:
        return cfg

    p = Path(config_path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    text = p.read_text(encoding="utf-8", errors="ignore")
    try:
        if p.suffix.lower() in (".yaml", ".yml"):
            user_cfg = yaml.safe_load(text) or {}
        elif p.suffix.lower() == ".json":
            user_cfg = json.loads(text)
        else:
            raise ConfigError("Config must be .yaml/.yml or .json")
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not parse config {config_path}: {e}") from e

    if not isinstance(user_cfg, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the top level")
    return _deep_merge(cfg, user_cfg)


def get_setting(cfg: Optional[Dict[str, Any]], section: str, key: str) -> Any:
    """Look up ``section.key`` in cfg, falling back to DEFAULT_CONFIG."""
    if cfg and key in (cfg.get(section) or {}):
        return cfg[section][key]
    return DEFAULT_CONFIG[section][key]


def configure_logging(cfg: Optional[Dict[str, Any]] = None) -> logging.Logger:
    level = (get_setting(cfg, "logging", "level") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    return logging.getLogger("flexdash")
