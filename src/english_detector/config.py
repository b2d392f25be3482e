"""Detector configuration.

A single YAML file (``configs/detector.yaml`` unless ``ENGLISH_DETECTOR_CONFIG``
points elsewhere) with ``${VAR}`` references expanded from the environment,
after loading a repo-root ``.env`` when one exists.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .utils import get_repo_root

CONFIG_ENV_VAR = "ENGLISH_DETECTOR_CONFIG"

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def load_env(env_path: Optional[str] = None) -> None:
    """Load .env if present."""
    path = Path(env_path) if env_path else get_repo_root() / ".env"
    if path.exists():
        load_dotenv(str(path))


def default_config_path() -> str:
    return os.getenv(CONFIG_ENV_VAR, str(get_repo_root() / "configs" / "detector.yaml"))


def env_interpolate(value: Any) -> Any:
    """Interpolate ${VAR} in strings."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: env_interpolate(v) for k, v in value.items()}
    if isinstance(value, list):
        return [env_interpolate(v) for v in value]
    return value


def as_bool(value: Any, name: str = "value") -> bool:
    """Strict boolean for config values.

    Interpolated values always arrive as strings, so ``"false"`` must not
    become ``True``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    raise ValueError(f"{name}: expected a boolean (true/false/1/0), got {value!r}")


def load_config(path_str: str) -> Dict[str, Any]:
    path = Path(path_str)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    return env_interpolate(cfg)
