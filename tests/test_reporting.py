from __future__ import annotations

from synapse_moderation.models import ModerationVerdict, VerdictSource, ViolationKind
from synapse_moderation.rules.engine import RuleEngine
from synapse_moderation.services.reporting import format_verdict


def test_format_clean_verdict() -> None:
    report = format_verdict(RuleEngine().evaluate("I have a great idea for a mobile app"))

    assert report.splitlines() == [
        "✅ CONTENT APPROVED",
        "",
        "📊 Confidence Score: 0.10",
        "",
        "🟢 No violations detected",
    ]


def test_format_rejected_verdict_lists_violations_in_kind_order() -> None:
    verdict = ModerationVerdict(
        is_allowed=False,
        confidence=0.7,
        violations=frozenset({ViolationKind.PERSONAL_INFO, ViolationKind.SELF_HARM}),
        source=VerdictSource.RULES,
        sanitized_content="mail [EMAIL_REMOVED]",
    )

    report = format_verdict(verdict)

    assert report.splitlines() == [
        "❌ CONTENT REJECTED",
        "",
        "📊 Confidence Score: 0.70",
        "",
        "⚠️ Violations detected:",
        "  • Self-Harm",
        "  • Personal-Info",
        "",
        "🔧 Sanitized version:",
        '"mail [EMAIL_REMOVED]"',
    ]
