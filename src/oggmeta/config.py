"""Configuration management for oggmeta.

Supports loading configuration from:
1. Environment variables (OGGMETA_*)
2. Config file (~/.oggmeta/config.yaml)
3. Default values

Example config file (~/.oggmeta/config.yaml):
    scan:
      verify_crc: false
      stop_early: true
      idle_pages: 16
      max_segments: 255
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from oggmeta.container.page import MAX_SEGMENTS

# Config file search locations (in priority order)
CONFIG_LOCATIONS = [
    Path.home() / ".oggmeta" / "config.yaml",
    Path.home() / ".config" / "oggmeta" / "config.yaml",
    Path(".oggmeta.yaml"),
]


@dataclass
class ScanConfig:
    """Scan configuration.

    Attributes:
        verify_crc: Check every page checksum; a mismatch ends the scan
        stop_early: Stop once every stream's headers are read and no new
            stream has started for ``idle_pages`` pages
        idle_pages: Pages without a new stream before an early stop
        max_segments: Largest segment table accepted in a page header
    """

    verify_crc: bool = False
    stop_early: bool = False
    idle_pages: int = 16
    max_segments: int = MAX_SEGMENTS


@dataclass
class OggMetaConfig:
    """Main configuration for oggmeta."""

    scan: ScanConfig = field(default_factory=ScanConfig)


def _load_yaml_config() -> dict[str, Any]:
    """Load configuration from the first YAML file found."""
    for config_path in CONFIG_LOCATIONS:
        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = yaml.safe_load(f)
                    return data if data else {}
            except (OSError, yaml.YAMLError):
                continue
    return {}


def _get_env(key: str, default: Any = None) -> Any:
    """Get environment variable with OGGMETA_ prefix."""
    return os.environ.get(f"OGGMETA_{key}", default)


def _parse_bool(value: str | None) -> bool | None:
    """Parse boolean from string."""
    if value is None:
        return None
    return value.lower() in ("true", "1", "yes", "on")


def load_config() -> OggMetaConfig:
    """Load configuration from file and environment variables.

    Priority (highest first):
    1. Environment variables (OGGMETA_*)
    2. Config file (~/.oggmeta/config.yaml)
    3. Default values
    """
    file_config = _load_yaml_config()

    scan_config = file_config.get("scan", {}) or {}
    scan = ScanConfig(
        verify_crc=(
            _parse_bool(_get_env("VERIFY_CRC"))
            if _get_env("VERIFY_CRC")
            else bool(scan_config.get("verify_crc", False))
        ),
        stop_early=(
            _parse_bool(_get_env("STOP_EARLY"))
            if _get_env("STOP_EARLY")
            else bool(scan_config.get("stop_early", False))
        ),
        idle_pages=int(_get_env("IDLE_PAGES") or scan_config.get("idle_pages", 16)),
        max_segments=int(
            _get_env("MAX_SEGMENTS") or scan_config.get("max_segments", MAX_SEGMENTS)
        ),
    )

    return OggMetaConfig(scan=scan)


# Global config instance (lazy loaded)
_config: OggMetaConfig | None = None


def get_config() -> OggMetaConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
