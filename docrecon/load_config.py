"""Logic for loading and merging configuration files."""

import logging
from pathlib import Path
from typing import Any

import yaml

from docrecon.deep_merge import deep_merge
from docrecon.name_flags import NameFlags, flags_from_names

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "include_visibility": ["internal", "private", "protected", "public"],
    "skip_compiler_generated": True,
    "compiler_generated_prefixes": ["<"],
    "fail_fast": False,
    "log_level": "INFO",
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = DEFAULT_CONFIG.copy()
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
        else:
            logger.warning("Config file %s not found, using defaults", path)
    return config


def visibility_flags(config: dict[str, Any]) -> NameFlags:
    """Map the configured visibility names to NameFlags."""
    return flags_from_names(config.get("include_visibility") or [])
