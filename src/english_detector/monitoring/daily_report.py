from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List

import numpy as np

from ..logging_utils import get_logger

logger = get_logger(__name__)


@dataclass
class DailyReport:
    n: int
    endpoint_counts: Dict[str, int]
    reason_counts: Dict[str, int]
    language_counts: Dict[str, int]
    english_ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n": self.n,
            "endpoint_counts": self.endpoint_counts,
            "reason_counts": self.reason_counts,
            "language_counts": self.language_counts,
            "english_ratio": self.english_ratio,
        }


def _read_jsonl(path: Path) -> Iterable[Dict[str, Any]]:
    if not path.exists():
        return
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping malformed request log line", extra={"path": str(path)})


def generate_report(request_log: Path) -> DailyReport:
    endpoint_counter: Counter = Counter()
    reason_counter: Counter = Counter()
    lang_counter: Counter = Counter()
    flags: List[float] = []

    for rec in _read_jsonl(request_log):
        endpoint_counter.update([rec.get("endpoint", "unknown")])
        reason_counter.update([rec.get("reason", "unknown")])
        lang_counter.update([rec.get("language", "und")])
        flags.append(1.0 if rec.get("isEnglish") else 0.0)

    return DailyReport(
        n=len(flags),
        endpoint_counts=dict(endpoint_counter),
        reason_counts=dict(reason_counter),
        language_counts=dict(lang_counter),
        english_ratio=float(np.mean(flags)) if flags else 0.0,
    )
