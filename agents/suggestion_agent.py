"""
Suggestion Agent

Drafts improvement suggestions for a checklist, falling back to generic
guidance when the model is unavailable.
"""

import logging
from typing import Any, Optional

from agents.base import LLMProviderError, get_default_llm, request_structured
from agents.prompts import SUGGESTION_SYSTEM_PROMPT, build_suggestion_prompt
from schemas.checklist import ChecklistProgress, ChecklistSnapshot
from schemas.report import ReportSuggestionRequest, ReportSuggestionResponse
from services.reporting import build_suggestion_fallback

logger = logging.getLogger("evidence_analyzer.agents.suggestions")


async def generate_suggestions(
    request: ReportSuggestionRequest,
    checklist: ChecklistSnapshot,
    progress: Optional[ChecklistProgress] = None,
    llm: Any = None,
    timeout: Optional[float] = None
) -> ReportSuggestionResponse:
    """
    Generate improvement suggestions for a checklist.

    Args:
        request: Audience, tone, focus areas and evidence highlights
        checklist: Checklist snapshot
        progress: Checklist progress, if known
        llm: LLM to use (defaults to the configured provider)
        timeout: Provider call timeout in seconds

    Returns:
        ReportSuggestionResponse, ``source`` set to "ai" or "heuristic"
    """
    llm = llm if llm is not None else get_default_llm()
    if llm is None:
        logger.warning("LLM API key missing; using heuristic suggestions.")
        return build_suggestion_fallback(checklist, progress)

    try:
        suggestions = await request_structured(
            llm,
            SUGGESTION_SYSTEM_PROMPT,
            build_suggestion_prompt(request, checklist, progress),
            ReportSuggestionResponse,
            timeout=timeout
        )
    except LLMProviderError as e:
        logger.warning(f"Falling back to heuristic suggestions due to LLM issue: {e}")
        return build_suggestion_fallback(checklist, progress)

    return suggestions.model_copy(update={"source": "ai"})
