from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from ..config import as_bool, default_config_path, load_config, load_env
from ..detection.factory import build_policy_from_config
from ..detection.policy import TextLanguagePolicy
from ..logging_utils import get_logger
from ..monitoring.log_writer import RequestLogger
from ..utils import resolve_paths

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_detector_config() -> Dict[str, Any]:
    load_env()
    path = default_config_path()
    logger.info(f"Loading detector config: {path}")
    return load_config(path)


@lru_cache(maxsize=1)
def get_policy() -> TextLanguagePolicy:
    return build_policy_from_config(get_detector_config())


def build_request_logger(cfg: Dict[str, Any]) -> RequestLogger:
    paths = resolve_paths(artifacts_dir_cfg=str(cfg.get("paths", {}).get("artifacts_dir", "")))
    logging_cfg = cfg.get("logging", {})
    privacy_cfg = cfg.get("privacy", {})

    log_path = paths.runs_dir / str(logging_cfg.get("request_log_name", "requests.jsonl"))
    return RequestLogger(
        path=log_path,
        store_raw_text=as_bool(
            privacy_cfg.get("store_raw_text_in_logs", False), "privacy.store_raw_text_in_logs"
        ),
    )


@lru_cache(maxsize=1)
def get_request_logger() -> RequestLogger:
    return build_request_logger(get_detector_config())
