from __future__ import annotations

import re
from typing import Optional

_URL_RE = re.compile(r"https?://\S+")
_MENTION_RE = re.compile(r"@\w+")
_HASHTAG_RE = re.compile(r"#\w+")
_EMOJI_RE = re.compile(
    "["
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F300-\U0001F5FF"  # symbols & pictographs
    "\U0001F680-\U0001F6FF"  # transport & map
    "\U0001F1E0-\U0001F1FF"  # flags
    "\u2600-\u26FF"  # misc symbols
    "\u2700-\u27BF"  # dingbats
    "]"
)
# Anything that is not a letter, digit or whitespace. `\w` also matches "_", which is punctuation here.
_UNICODE_PUNCT_RE = re.compile(r"[^\w\s]|_")
_ASCII_PUNCT_RE = re.compile(r"[^A-Za-z0-9\s]")
_WS_RE = re.compile(r"\s+")


def clean_text(text: Optional[str], unicode_punctuation: bool = True) -> str:
    """Strip tokens that carry no language signal before detection.

    Removes URLs, @mentions, #hashtags and emoji, turns punctuation into
    spaces and collapses whitespace. With ``unicode_punctuation=False`` only
    ASCII letters and digits survive the punctuation pass.
    """
    cleaned = text or ""
    cleaned = _URL_RE.sub("", cleaned)
    cleaned = _MENTION_RE.sub("", cleaned)
    cleaned = _HASHTAG_RE.sub("", cleaned)
    cleaned = _EMOJI_RE.sub("", cleaned)
    punct_re = _UNICODE_PUNCT_RE if unicode_punctuation else _ASCII_PUNCT_RE
    cleaned = punct_re.sub(" ", cleaned)
    return _WS_RE.sub(" ", cleaned).strip()
