from __future__ import annotations

from typing import Iterable

from ..models import ModerationVerdict, VerdictSource, ViolationKind
from .patterns import (
    DEFAULT_KEYWORDS,
    SHOUTING_MIN_LENGTH,
    contains_email,
    count_emoji,
    redact_emails,
    text_length,
)

CLEAN_CONFIDENCE = 0.1
FLAGGED_CONFIDENCE = 0.7


class RuleEngine:
    """Offline classifier used when the provider is unavailable and for quick checks.

    Every input, the empty string included, maps to a verdict. The engine
    holds only its keyword tuple, so one instance can be shared freely.
    """

    def __init__(self, keywords: Iterable[str] = DEFAULT_KEYWORDS) -> None:
        self._keywords = tuple(keyword.lower() for keyword in keywords)

    def evaluate(self, text: str) -> ModerationVerdict:
        violations: set[ViolationKind] = set()
        if self.detect_spam(text):
            violations.add(ViolationKind.SPAM)
        if self.detect_personal_info(text):
            violations.add(ViolationKind.PERSONAL_INFO)
        if self.detect_profanity(text):
            violations.add(ViolationKind.PROFANITY)

        is_allowed = not violations
        return ModerationVerdict(
            is_allowed=is_allowed,
            confidence=CLEAN_CONFIDENCE if is_allowed else FLAGGED_CONFIDENCE,
            violations=frozenset(violations),
            source=VerdictSource.RULES,
            sanitized_content=None if is_allowed else self.sanitize(text),
        )

    def detect_spam(self, text: str) -> bool:
        length = text_length(text)
        too_many_emoji = count_emoji(text) * 3 > length
        shouting = length > SHOUTING_MIN_LENGTH and text.upper() == text
        return too_many_emoji or shouting

    def detect_personal_info(self, text: str) -> bool:
        return contains_email(text)

    def detect_profanity(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._keywords)

    def sanitize(self, text: str) -> str:
        # Only personal info is redacted; spam and profanity pass through as-is.
        return redact_emails(text).strip()
