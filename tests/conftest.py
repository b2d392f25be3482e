from __future__ import annotations

import sys
from pathlib import Path
from typing import Tuple

import pytest

# Ensure `src/` is on sys.path so tests work without installing the package.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if SRC.exists():
    sys.path.insert(0, str(SRC))

from english_detector.detection.classifier import LanguageClassifier  # noqa: E402


class FixedClassifier(LanguageClassifier):
    """Returns a canned answer and remembers what it was asked."""

    def __init__(self, lang: str, prob: float = 0.99):
        self._answer = (lang, prob)
        self.calls = []

    def detect(self, text: str) -> Tuple[str, float]:
        self.calls.append(text)
        return self._answer


@pytest.fixture
def fixed_classifier():
    return FixedClassifier
