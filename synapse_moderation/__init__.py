"""
Synapse content moderation core.

Wraps the external moderation provider and the offline rule engine behind a
single orchestrator, so idea, pod and chat submission paths get one verdict
shape whichever strategy produced it.
"""

from .models import ContentCategory, ModerationVerdict, VerdictSource, ViolationKind
from .rules.engine import RuleEngine
from .services.moderation_service import ModerationOrchestrator

__all__ = [
    "ContentCategory",
    "ModerationOrchestrator",
    "ModerationVerdict",
    "RuleEngine",
    "VerdictSource",
    "ViolationKind",
]
