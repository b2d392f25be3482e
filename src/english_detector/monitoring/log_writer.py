from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

from ..utils import ensure_dir, sha256_text


@dataclass
class RequestLogger:
    path: Path
    store_raw_text: bool = False

    def __post_init__(self) -> None:
        ensure_dir(self.path.parent)

    def log(self, text: str, payload: Dict[str, Any]) -> None:
        record: Dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "text_sha256": sha256_text(text or ""),
            **payload,
        }
        if self.store_raw_text:
            record["text"] = text

        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
