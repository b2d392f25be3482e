from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from langdetect.detector_factory import PROFILES_DIRECTORY, DetectorFactory
from langdetect.lang_detect_exception import LangDetectException
from lingua import LanguageDetector, LanguageDetectorBuilder

from ..logging_utils import get_logger

logger = get_logger(__name__)

UNDETERMINED = "und"

_LOAD_LOCK = threading.Lock()
_LANGDETECT_FACTORY: Optional[DetectorFactory] = None
_LINGUA_DETECTORS: Dict[float, LanguageDetector] = {}


def _langdetect_factory() -> DetectorFactory:
    """Load the langdetect profiles once per process.

    langdetect's own ``init_factory`` publishes its global factory before the
    profiles finish loading, so concurrent first calls can see a partial
    profile set. The factory here is only published once fully loaded.
    """
    global _LANGDETECT_FACTORY
    with _LOAD_LOCK:
        if _LANGDETECT_FACTORY is None:
            factory = DetectorFactory()
            factory.load_profile(PROFILES_DIRECTORY)
            _LANGDETECT_FACTORY = factory
            logger.info("Loaded langdetect profiles", extra={"n_languages": len(factory.get_lang_list())})
        return _LANGDETECT_FACTORY


def _lingua_detector(min_relative_distance: float) -> LanguageDetector:
    with _LOAD_LOCK:
        detector = _LINGUA_DETECTORS.get(min_relative_distance)
        if detector is None:
            detector = (
                LanguageDetectorBuilder.from_all_languages()
                .with_minimum_relative_distance(min_relative_distance)
                .build()
            )
            _LINGUA_DETECTORS[min_relative_distance] = detector
        return detector


class LanguageClassifier:
    """Engine seam: ``detect(text) -> (iso_639_1_code, probability)``.

    Implementations never raise on text content; when the engine cannot
    decide they return ``(undetermined_code, 0.0)``.
    """

    undetermined_code: str = UNDETERMINED

    def detect(self, text: str) -> Tuple[str, float]:
        raise NotImplementedError


@dataclass
class LinguaClassifier(LanguageClassifier):
    """Default engine; ``lingua`` stays accurate on a handful of words."""

    min_relative_distance: float = 0.0
    undetermined_code: str = UNDETERMINED

    def __post_init__(self) -> None:
        self._detector = _lingua_detector(float(self.min_relative_distance))

    def detect(self, text: str) -> Tuple[str, float]:
        language = self._detector.detect_language_of(text)
        if language is None:
            return self.undetermined_code, 0.0
        prob = self._detector.compute_language_confidence(text, language)
        return language.iso_code_639_1.name.lower(), float(prob)


@dataclass
class LangDetectClassifier(LanguageClassifier):
    """``langdetect`` engine.

    Each call gets its own ``Detector``; with a fixed seed its random
    sampling is reproducible.
    """

    seed: Optional[int] = 0
    n_trial: int = 7
    undetermined_code: str = UNDETERMINED

    def __post_init__(self) -> None:
        self._factory = _langdetect_factory()

    def detect(self, text: str) -> Tuple[str, float]:
        detector = self._factory.create()
        detector.seed = self.seed
        detector.n_trial = self.n_trial
        detector.append(text)
        try:
            candidates = detector.get_probabilities()
        except LangDetectException:
            return self.undetermined_code, 0.0
        if not candidates:
            return self.undetermined_code, 0.0
        top = candidates[0]
        return str(top.lang), float(top.prob)
