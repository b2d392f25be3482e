from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_repo_root() -> Path:
    # Assumes this file is src/english_detector/utils.py
    return Path(__file__).resolve().parents[2]


def env_path(key: str, default: Optional[str] = None) -> Optional[Path]:
    val = os.getenv(key, default)
    if val is None or val == "":
        return None
    return Path(val)


@dataclass(frozen=True)
class ResolvedPaths:
    repo_root: Path
    artifacts_dir: Path
    runs_dir: Path


def resolve_paths(artifacts_dir_cfg: str = "") -> ResolvedPaths:
    """Resolve directories with a priority:

    1) explicit config value (if non-empty)
    2) environment variables
    3) repo defaults
    """
    repo_root = get_repo_root()

    artifacts_dir = (
        Path(artifacts_dir_cfg)
        if artifacts_dir_cfg
        else (env_path("ARTIFACTS_DIR") or (repo_root / "artifacts"))
    )
    runs_dir = env_path("ENGLISH_DETECTOR_RUN_DIR") or (artifacts_dir / "runs")

    ensure_dir(artifacts_dir)
    ensure_dir(runs_dir)

    return ResolvedPaths(
        repo_root=repo_root,
        artifacts_dir=artifacts_dir,
        runs_dir=runs_dir,
    )
