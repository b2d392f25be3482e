from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Reason(str, Enum):
    EMPTY = "empty"
    TOO_SHORT = "too_short"
    UNDETERMINED = "undetermined"
    DETECTED = "detected"


@dataclass
class ClassificationResult:
    is_english: bool
    reason: Reason
    language: str
    cleaned_length: int

    def to_dict(self) -> Dict:
        return {"isEnglish": self.is_english}

    def to_log_dict(self) -> Dict:
        return {
            "isEnglish": self.is_english,
            "reason": self.reason.value,
            "language": self.language,
            "cleaned_length": self.cleaned_length,
        }


@dataclass
class BatchItem:
    text: str
    result: ClassificationResult

    @property
    def is_english(self) -> bool:
        return self.result.is_english

    def to_dict(self) -> Dict:
        return {"text": self.text, "isEnglish": self.result.is_english}
