from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ViolationKind(str, Enum):
    HATE = "hate"
    HARASSMENT = "harassment"
    VIOLENCE = "violence"
    SELF_HARM = "self-harm"
    SEXUAL = "sexual"
    SPAM = "spam"
    TOXICITY = "toxicity"
    PROFANITY = "profanity"
    PERSONAL_INFO = "personal-info"


class ContentCategory(str, Enum):
    """Where the text comes from. Advisory only, detection never reads it."""

    IDEA = "idea"
    COMMENT = "comment"
    CHAT = "chat"
    TASK = "task"
    PROFILE = "profile"
    POD_DESCRIPTION = "pod_description"


class VerdictSource(str, Enum):
    PROVIDER = "provider"
    RULES = "rules"


def new_moderation_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class ModerationVerdict:
    is_allowed: bool
    confidence: float
    violations: frozenset[ViolationKind]
    source: VerdictSource
    sanitized_content: Optional[str] = None
    moderation_id: str = field(default_factory=new_moderation_id)

    def ordered_violations(self) -> list[ViolationKind]:
        return [kind for kind in ViolationKind if kind in self.violations]


__all__ = [
    "ContentCategory",
    "ModerationVerdict",
    "VerdictSource",
    "ViolationKind",
    "new_moderation_id",
]
