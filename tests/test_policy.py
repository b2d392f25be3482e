from concurrent.futures import ThreadPoolExecutor

import pytest

from english_detector.detection import classifier as classifier_mod
from english_detector.detection.classifier import (
    UNDETERMINED,
    LangDetectClassifier,
    LinguaClassifier,
)
from english_detector.detection.policy import PolicyConfig, TextLanguagePolicy
from english_detector.detection.results import Reason

FOX = "The quick brown fox jumps over the lazy dog and runs away"


def _policy(classifier, **cfg):
    return TextLanguagePolicy(
        config=PolicyConfig(**cfg),
        classifiers={"lingua": classifier, "langdetect": classifier},
    )


@pytest.mark.parametrize("default", [True, False])
def test_short_text_returns_default(fixed_classifier, default):
    clf = fixed_classifier("fr")
    res = _policy(clf).classify("ok", default)
    assert res.is_english is default
    assert res.reason == Reason.TOO_SHORT
    assert clf.calls == []


@pytest.mark.parametrize("default", [True, False])
def test_empty_after_cleaning_returns_default(fixed_classifier, default):
    clf = fixed_classifier("en")
    res = _policy(clf).classify("\U0001F600 https://example.com @bob #tag", default)
    assert res.is_english is default
    assert res.reason == Reason.EMPTY
    assert res.cleaned_length == 0
    assert clf.calls == []


def test_min_length_is_configurable(fixed_classifier):
    clf = fixed_classifier("en")
    text = "hello there"  # 11 chars
    assert _policy(clf, min_text_length=10).classify(text).reason == Reason.DETECTED
    assert _policy(clf, min_text_length=12).classify(text).reason == Reason.TOO_SHORT


def test_classifier_sees_cleaned_text(fixed_classifier):
    clf = fixed_classifier("en")
    _policy(clf).classify("Hello, friends! @bob https://x.io")
    assert clf.calls == ["Hello friends"]


@pytest.mark.parametrize("default", [True, False])
def test_undetermined_returns_default(fixed_classifier, default):
    res = _policy(fixed_classifier(UNDETERMINED, 0.0)).classify("some longer text here", default)
    assert res.is_english is default
    assert res.reason == Reason.UNDETERMINED


def test_low_confidence_counts_as_undetermined(fixed_classifier):
    policy = _policy(fixed_classifier("en", 0.55), min_confidence=0.7)
    res = policy.classify("some longer text here", True)
    assert res.reason == Reason.UNDETERMINED
    assert res.language == "en"
    assert res.is_english is True


def test_determined_english(fixed_classifier):
    res = _policy(fixed_classifier("en")).classify("some longer text here", False)
    assert res.is_english is True
    assert res.reason == Reason.DETECTED
    assert res.to_dict() == {"isEnglish": True}


def test_determined_non_english_ignores_default(fixed_classifier):
    res = _policy(fixed_classifier("de")).classify("some longer text here", True)
    assert res.is_english is False
    assert res.language == "de"


def test_methods_are_tried_in_order(fixed_classifier):
    first = fixed_classifier(UNDETERMINED, 0.0)
    second = fixed_classifier("en")
    policy = TextLanguagePolicy(classifiers={"lingua": first, "langdetect": second})

    res = policy.classify("some longer text here", False, ["lingua", "langdetect"])
    assert res.is_english is True
    assert first.calls == second.calls == ["some longer text here"]

    res = policy.classify("some longer text here", False, ["langdetect", "lingua"])
    assert res.is_english is True
    assert len(first.calls) == 1


def test_configured_methods_used_by_default(fixed_classifier):
    lingua = fixed_classifier("fr")
    langdetect = fixed_classifier("en")
    policy = TextLanguagePolicy(
        config=PolicyConfig(detection_methods=("langdetect",)),
        classifiers={"lingua": lingua, "langdetect": langdetect},
    )
    assert policy.classify("some longer text here").is_english is True
    assert lingua.calls == []


def test_batch_preserves_order_and_pairs_text(fixed_classifier):
    texts = ["first text here", "ok", "", "third text here"]
    items = _policy(fixed_classifier("en")).classify_batch(texts, True)
    assert len(items) == len(texts)
    assert [i.text for i in items] == texts
    assert [i.is_english for i in items] == [True, True, True, True]
    assert [i.result.reason for i in items] == [Reason.DETECTED, Reason.TOO_SHORT, Reason.EMPTY, Reason.DETECTED]


def test_batch_empty(fixed_classifier):
    assert _policy(fixed_classifier("en")).classify_batch([]) == []


def test_policy_config_from_dict():
    cfg = PolicyConfig.from_dict(
        {"min_text_length": "10", "unicode_punctuation": "false", "langdetect_seed": None}
    )
    assert cfg.min_text_length == 10
    assert cfg.unicode_punctuation is False
    assert cfg.langdetect_seed is None
    assert cfg.english_code == "en"
    assert cfg.detection_methods == ("lingua",)


def test_policy_config_rejects_unknown_method():
    with pytest.raises(ValueError):
        PolicyConfig.from_dict({"detection_methods": ["franc"]})


def test_policy_config_rejects_non_boolean_flag():
    with pytest.raises(ValueError):
        PolicyConfig.from_dict({"unicode_punctuation": "maybe"})


# ---- real engines ----

@pytest.fixture(scope="module")
def real_policy():
    return TextLanguagePolicy()


def test_english_greeting_is_english(real_policy):
    for _ in range(3):
        assert real_policy.classify("Hello, how are you today?", False).is_english is True


def test_french_greeting_is_not_english(real_policy):
    for _ in range(3):
        assert real_policy.classify("Bonjour, comment ça va?", False).is_english is False


def test_too_short_defaults_true(real_policy):
    assert real_policy.classify("ok", True).is_english is True


def test_lingua_no_letters_is_undetermined():
    assert LinguaClassifier().detect("12345 67890") == (UNDETERMINED, 0.0)


def test_langdetect_no_features_is_undetermined():
    assert LangDetectClassifier().detect("12345 67890") == (UNDETERMINED, 0.0)


def test_langdetect_engine_english_sentence(real_policy):
    assert real_policy.classify(FOX, False, ["langdetect"]).language == "en"


def test_langdetect_cold_start_is_thread_safe(monkeypatch):
    monkeypatch.setattr(classifier_mod, "_LANGDETECT_FACTORY", None)

    def run(_):
        return LangDetectClassifier().detect(FOX)[0]

    with ThreadPoolExecutor(max_workers=16) as pool:
        langs = list(pool.map(run, range(320)))
    assert set(langs) == {"en"}


def test_lingua_concurrent_detection():
    clf = LinguaClassifier()
    with ThreadPoolExecutor(max_workers=16) as pool:
        langs = list(pool.map(lambda _: clf.detect(FOX)[0], range(64)))
    assert set(langs) == {"en"}
