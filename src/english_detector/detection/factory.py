from __future__ import annotations

from typing import Any, Dict

from ..config import load_config
from .policy import PolicyConfig, TextLanguagePolicy


def build_policy_from_config(cfg: Dict[str, Any]) -> TextLanguagePolicy:
    return TextLanguagePolicy(config=PolicyConfig.from_dict(cfg.get("policy", {})))


def build_policy(config_path: str) -> TextLanguagePolicy:
    """Build a TextLanguagePolicy from a detector config.

    This is used by both the CLI and the API dependencies.
    """
    return build_policy_from_config(load_config(config_path))
