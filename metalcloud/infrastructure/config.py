"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all metalcloud settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Env keys are PREFIX_SECTION_FIELD, split on the first underscore after the
  section, e.g. METAL_API_PROJECT_ID -> api.project_id
"""

from __future__ import annotations
import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "metalcloud.json"


@dataclass(frozen=True)
class ApiConfig:
    """Provider REST API access."""
    url: str = "https://api.equinix.com/metal/v1"
    key: str = ""
    project_id: str = ""
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class DirectoryConfig:
    """Which device directory backs the resolver."""
    backend: str = "api"  # "api" or "memory"
    fixtures_path: str = ""


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry configuration."""
    endpoint: str = ""
    insecure: bool = False


@dataclass(frozen=True)
class MetalCloudConfig:
    """Root configuration for metalcloud."""
    api: ApiConfig = field(default_factory=ApiConfig)
    directory: DirectoryConfig = field(default_factory=DirectoryConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"


def _env_override(data: dict, prefix: str = "METAL") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern METAL_SECTION_KEY.
    For example: METAL_API_KEY=..., METAL_DIRECTORY_BACKEND=memory
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        parts = key[len(prefix) + 1:].lower().split("_", 1)
        if parts == ["log", "level"]:
            data["log_level"] = value
        elif len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            logger.debug("Ignoring environment variable %s: no config field", key)
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a mapping, got %r", cls.__name__, data)
        data = {}
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert strings from the environment to the declared field type
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type == "int":
                filtered[f.name] = int(filtered[f.name])
            elif f.type == "float":
                filtered[f.name] = float(filtered[f.name])
            elif f.type == "bool":
                filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "METAL",
) -> MetalCloudConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (METAL_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to metalcloud.json in CWD.
        env_prefix: Environment variable prefix. Defaults to METAL.
    """
    config_path = Path(path) if path else Path(DEFAULT_CONFIG_FILE)
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return MetalCloudConfig(
        api=_build_sub_config(ApiConfig, data.get("api", {})),
        directory=_build_sub_config(DirectoryConfig, data.get("directory", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=data.get("log_level", "WARNING"),
    )
