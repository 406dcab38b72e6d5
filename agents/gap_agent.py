"""
Gap Analysis Agent

Compares requirements with evidence snippets through the model, falling back
to the local keyword heuristic when the model is unavailable or misbehaves.
"""

import logging
from typing import Any, Iterable, Optional

from agents.base import LLMProviderError, get_default_llm, request_structured
from agents.prompts import GAP_SYSTEM_PROMPT, build_gap_prompt
from schemas.gaps import GapAnalysisAiSummary
from services.gap_analyzer import MAX_PARTIAL, MAX_PRIORITY, MAX_UNCOVERED, heuristic_gap_analysis

logger = logging.getLogger("evidence_analyzer.agents.gaps")


def normalize_gap_summary(summary: GapAnalysisAiSummary) -> GapAnalysisAiSummary:
    """Cap list lengths and tag the summary as model-derived."""
    return summary.model_copy(update={
        "uncovered_requirements": summary.uncovered_requirements[:MAX_UNCOVERED],
        "partial_coverage": summary.partial_coverage[:MAX_PARTIAL],
        "priority_gaps": summary.priority_gaps[:MAX_PRIORITY],
        "source": "ai",
    })


async def analyze_gaps(
    requirements: Iterable[str],
    evidence: Iterable[str],
    llm: Any = None,
    timeout: Optional[float] = None
) -> GapAnalysisAiSummary:
    """
    Summarize which requirements the evidence covers.

    Never raises for provider problems: a missing API key or any provider
    failure is logged and answered with the heuristic summary.

    Args:
        requirements: Requirement statements
        evidence: Evidence snippets
        llm: LLM to use (defaults to the configured provider)
        timeout: Provider call timeout in seconds

    Returns:
        GapAnalysisAiSummary, ``source`` set to "ai" or "heuristic"
    """
    requirements = [r for r in requirements or [] if r is not None]
    evidence = [e for e in evidence or [] if e is not None]

    llm = llm if llm is not None else get_default_llm()
    if llm is None:
        logger.warning("LLM API key missing; using heuristic gap analyzer.")
        return heuristic_gap_analysis(requirements, evidence)

    try:
        summary = await request_structured(
            llm,
            GAP_SYSTEM_PROMPT,
            build_gap_prompt(requirements, evidence),
            GapAnalysisAiSummary,
            timeout=timeout
        )
    except LLMProviderError as e:
        logger.warning(f"Falling back to heuristic gap analysis due to LLM issue: {e}")
        return heuristic_gap_analysis(requirements, evidence)

    return normalize_gap_summary(summary)
