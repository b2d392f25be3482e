from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import as_bool
from ..logging_utils import get_logger
from .classifier import UNDETERMINED, LangDetectClassifier, LanguageClassifier, LinguaClassifier
from .cleaning import clean_text
from .results import BatchItem, ClassificationResult, Reason

logger = get_logger(__name__)

DETECTION_METHODS = ("lingua", "langdetect")


@dataclass(frozen=True)
class PolicyConfig:
    min_text_length: int = 5
    unicode_punctuation: bool = True
    english_code: str = "en"
    undetermined_code: str = UNDETERMINED
    min_confidence: float = 0.0
    detection_methods: Tuple[str, ...] = ("lingua",)
    lingua_min_relative_distance: float = 0.0
    langdetect_seed: Optional[int] = 0
    langdetect_trials: int = 7

    @staticmethod
    def from_dict(data: Optional[Dict[str, Any]]) -> "PolicyConfig":
        data = data or {}
        methods = tuple(str(m) for m in (data.get("detection_methods") or ("lingua",)))
        unknown = [m for m in methods if m not in DETECTION_METHODS]
        if unknown:
            raise ValueError(f"Unknown detection methods {unknown}; expected any of {list(DETECTION_METHODS)}")
        seed = data.get("langdetect_seed", 0)
        return PolicyConfig(
            min_text_length=int(data.get("min_text_length", 5)),
            unicode_punctuation=as_bool(data.get("unicode_punctuation", True), "policy.unicode_punctuation"),
            english_code=str(data.get("english_code", "en")),
            undetermined_code=str(data.get("undetermined_code", UNDETERMINED)),
            min_confidence=float(data.get("min_confidence", 0.0)),
            detection_methods=methods,
            lingua_min_relative_distance=float(data.get("lingua_min_relative_distance", 0.0)),
            langdetect_seed=None if seed is None or seed == "" else int(seed),
            langdetect_trials=int(data.get("langdetect_trials", 7)),
        )


def build_classifiers(cfg: PolicyConfig) -> Dict[str, LanguageClassifier]:
    return {
        "lingua": LinguaClassifier(
            min_relative_distance=cfg.lingua_min_relative_distance,
            undetermined_code=cfg.undetermined_code,
        ),
        "langdetect": LangDetectClassifier(
            seed=cfg.langdetect_seed,
            n_trial=cfg.langdetect_trials,
            undetermined_code=cfg.undetermined_code,
        ),
    }


@dataclass
class TextLanguagePolicy:
    config: PolicyConfig = field(default_factory=PolicyConfig)
    classifiers: Optional[Dict[str, LanguageClassifier]] = None

    def __post_init__(self) -> None:
        if self.classifiers is None:
            self.classifiers = build_classifiers(self.config)

    def _fallback(self, reason: Reason, language: str, cleaned_length: int, default: bool) -> ClassificationResult:
        logger.debug(
            "Language detection fell back to default",
            extra={"reason": reason.value, "cleaned_length": cleaned_length, "default_on_undetermined": default},
        )
        return ClassificationResult(
            is_english=default,
            reason=reason,
            language=language,
            cleaned_length=cleaned_length,
        )

    def _detect(self, cleaned: str, methods: Sequence[str]) -> Tuple[str, float, str]:
        """Try each engine in order; the first determined answer wins."""
        cfg = self.config
        language, prob, method = cfg.undetermined_code, 0.0, methods[0]
        for method in methods:
            language, prob = self.classifiers[method].detect(cleaned)
            if language != cfg.undetermined_code and prob >= cfg.min_confidence:
                break
        return language, prob, method

    def classify(
        self,
        text: str,
        default_on_undetermined: bool = False,
        methods: Optional[Sequence[str]] = None,
    ) -> ClassificationResult:
        cfg = self.config
        methods = list(methods or cfg.detection_methods)

        # -------- Step 1: normalize --------
        cleaned = clean_text(text, unicode_punctuation=cfg.unicode_punctuation)
        n = len(cleaned)

        # -------- Step 2: too little signal --------
        if n == 0:
            return self._fallback(Reason.EMPTY, cfg.undetermined_code, n, default_on_undetermined)
        if n < cfg.min_text_length:
            return self._fallback(Reason.TOO_SHORT, cfg.undetermined_code, n, default_on_undetermined)

        # -------- Step 3: classify --------
        language, prob, method = self._detect(cleaned, methods)

        # -------- Step 4: undetermined or below confidence floor --------
        if language == cfg.undetermined_code or prob < cfg.min_confidence:
            return self._fallback(Reason.UNDETERMINED, language, n, default_on_undetermined)

        # -------- Step 5: decision --------
        is_english = language == cfg.english_code
        logger.debug(
            "Language detection result",
            extra={"method": method, "detected_language": language, "probability": prob, "is_english": is_english},
        )
        return ClassificationResult(
            is_english=is_english,
            reason=Reason.DETECTED,
            language=language,
            cleaned_length=n,
        )

    def classify_batch(
        self,
        texts: Sequence[str],
        default_on_undetermined: bool = False,
        methods: Optional[Sequence[str]] = None,
    ) -> List[BatchItem]:
        return [BatchItem(text=t, result=self.classify(t, default_on_undetermined, methods)) for t in texts]
