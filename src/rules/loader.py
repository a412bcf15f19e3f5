import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from src.rules.models import LinkConfig

# Environment variable -> config field
ENV_OVERRIDES = {
    "APP_KEY": "secret_key",
    "URL_WEB_FRONTEND": "frontend_url",
    "INVITE_EXPIRE_MINUTES": "expire_minutes",
}
PREVIOUS_KEYS_ENV = "APP_PREVIOUS_KEYS"
MAIL_FROM_ENV = "MAIL_FROM_ADDRESS"


def _strip_fences(content: str) -> str:
    # Robustly strip markdown code fences
    # Look for ```yaml starting block
    lines = content.splitlines()
    yaml_lines = []
    in_block = False
    found_block = False

    for line in lines:
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break

        if in_block:
            yaml_lines.append(line)

    # If we found a block, use it. Otherwise assume the whole file is YAML
    return "\n".join(yaml_lines) if found_block else content


def apply_env_overrides(
    data: dict[str, Any],
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Return a copy of data with environment overrides applied."""
    env = os.environ if environ is None else environ
    merged = dict(data)

    for env_var, key in ENV_OVERRIDES.items():
        value = env.get(env_var)
        if value:
            merged[key] = value

    previous = env.get(PREVIOUS_KEYS_ENV)
    if previous:
        merged["previous_secret_keys"] = [k.strip() for k in previous.split(",") if k.strip()]

    mail_from = env.get(MAIL_FROM_ENV)
    if mail_from:
        merged["mail"] = {**(merged.get("mail") or {}), "from_address": mail_from}

    return merged


def _validate(data: dict[str, Any]) -> LinkConfig:
    try:
        return LinkConfig.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Config validation failed:\n{e}") from e


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> LinkConfig:
    """
    Load and validate the config file, then apply environment overrides.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_strip_fences(content)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in config file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping")

    return _validate(apply_env_overrides(data, environ))


def load_config_from_env(environ: Mapping[str, str] | None = None) -> LinkConfig:
    """Build the config from environment variables alone."""
    return _validate(apply_env_overrides({}, environ))
