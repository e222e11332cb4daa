from __future__ import annotations

import re

import regex

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}", re.IGNORECASE)
EMAIL_REDACTION = "[EMAIL_REMOVED]"

# Intentionally tiny. This is a keyword tripwire, not a profanity database.
DEFAULT_KEYWORDS: tuple[str, ...] = ("spam", "scam", "fake")

SHOUTING_MIN_LENGTH = 15

# Unicode Emoji property, per code point. Includes ASCII digits, '#' and '*'.
EMOJI_PATTERN = regex.compile(r"\p{Emoji}")
GRAPHEME_PATTERN = regex.compile(r"\X")


def text_length(text: str) -> int:
    """Length in user-perceived characters (extended grapheme clusters)."""
    return len(GRAPHEME_PATTERN.findall(text))


def count_emoji(text: str) -> int:
    return len(EMOJI_PATTERN.findall(text))


def contains_email(text: str) -> bool:
    return EMAIL_PATTERN.search(text) is not None


def redact_emails(text: str) -> str:
    return EMAIL_PATTERN.sub(EMAIL_REDACTION, text)
