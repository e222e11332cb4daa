#!/usr/bin/env python3
"""
Diagnostic entry point for the moderation pipeline.

Usage:
    python run_moderation_check.py "text to check" ["more text" ...]

Environment:
    - SYNAPSE_OPENAI__API_KEY (or OPENAI_API_KEY)

Prints the service health lines, then the verdict for every argument. Without
an API key every verdict comes from the offline rules.
"""

import asyncio
import sys

from synapse_moderation import ContentCategory, ModerationOrchestrator
from synapse_moderation.config import ModerationSettings
from synapse_moderation.services import format_verdict


async def _main(texts: list[str]) -> None:
    settings = ModerationSettings()
    async with ModerationOrchestrator.from_settings(settings) as orchestrator:
        for line in await orchestrator.test_services():
            print(line)
        for text in texts:
            print(f"\n{'=' * 60}\n{text}\n{'=' * 60}")
            verdict = await orchestrator.moderate(text, ContentCategory.COMMENT)
            print(format_verdict(verdict))


if __name__ == "__main__":
    asyncio.run(_main(sys.argv[1:]))
