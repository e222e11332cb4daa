from __future__ import annotations

from ..models import ModerationVerdict


def format_verdict(verdict: ModerationVerdict) -> str:
    """Render a verdict the way the moderation test screen shows it."""
    lines: list[str] = []
    lines.append("✅ CONTENT APPROVED" if verdict.is_allowed else "❌ CONTENT REJECTED")
    lines.append("")
    lines.append(f"📊 Confidence Score: {verdict.confidence:.2f}")
    lines.append("")

    if verdict.violations:
        lines.append("⚠️ Violations detected:")
        lines.extend(f"  • {kind.value.title()}" for kind in verdict.ordered_violations())
    else:
        lines.append("🟢 No violations detected")

    if verdict.sanitized_content is not None:
        lines.append("")
        lines.append("🔧 Sanitized version:")
        lines.append(f'"{verdict.sanitized_content}"')
    return "\n".join(lines)
