from .moderation_service import ModerationOrchestrator
from .reporting import format_verdict

__all__ = ["ModerationOrchestrator", "format_verdict"]
