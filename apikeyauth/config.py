"""YAML + environment variable configuration loading.

Config file: config/apikeyauth.yaml
Env var override prefix: APIKEYAUTH_
Nesting convention: double underscore (e.g. APIKEYAUTH_AUTH__MALFORMED_STATUS)
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

_DEFAULT_CONFIG_PATH = Path("config/apikeyauth.yaml")

_DEFAULTS: dict[str, Any] = {
    "auth": {
        "malformed_status": 401,
        "reject_empty_key": False,
        "exempt_paths": ["/healthz"],
    },
    "logging": {
        "level": "INFO",
    },
}

ENV_PREFIX = "APIKEYAUTH_"

# Keys whose env value is a comma separated list.
_LIST_KEYS = {("auth", "exempt_paths")}


def _deep_merge(base: dict, override: dict) -> dict:
    """Merge a YAML section such as auth: over the defaults, key by key."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_value(value: str) -> int | float | bool | str:
    """Coerce an env value: "true"/"false" for reject_empty_key, ints for malformed_status."""
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    return value


def _apply_env_overrides(config: dict) -> dict:
    """Apply APIKEYAUTH_ prefixed environment variables as overrides.

    Double underscore separates nesting levels:
        APIKEYAUTH_AUTH__MALFORMED_STATUS=400 -> config["auth"]["malformed_status"] = 400
        APIKEYAUTH_AUTH__EXEMPT_PATHS=/healthz,/metrics -> ["/healthz", "/metrics"]
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX) :].lower().split("__")
        target = config
        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]
        if tuple(parts) in _LIST_KEYS:
            target[parts[-1]] = [p.strip() for p in value.split(",") if p.strip()]
        else:
            target[parts[-1]] = _coerce_value(value)
    return config


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from YAML file with env var overrides.

    Precedence (highest wins): env vars > YAML file > defaults.
    The result always has auth.malformed_status, auth.reject_empty_key,
    auth.exempt_paths and logging.level.
    """
    config = copy.deepcopy(_DEFAULTS)

    path = config_path or _DEFAULT_CONFIG_PATH
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config = _deep_merge(config, file_config)

    config = _apply_env_overrides(config)
    return config
