"""
Evidence Match Agent

Asks the model whether a document satisfies a requirement, then repairs the
answer: missing excerpts are filled from the document, and non-matching
results always carry missing elements and remediation text.
"""

import logging
from typing import Any, Optional

from agents.base import LLMProviderError, get_default_llm, request_structured
from agents.prompts import MATCH_SYSTEM_PROMPT, build_match_prompt
from schemas.analysis import AnalyzeMatchRequest, MatchAssessment
from services.text_analysis import extract_relevant_sections, extract_tokens

logger = logging.getLogger("evidence_analyzer.agents.evidence")

DEFAULT_MISSING_ELEMENT = "Add concrete evidence such as policy IDs, screenshots, or logged approvals."
DEFAULT_IMPROVEMENT_SUGGESTION = (
    "Document the control owner, process steps, and attach dated evidence (policy IDs, logs, approvals)."
)


class EvidenceAnalysisError(Exception):
    """The model-backed evidence analysis could not produce a result."""

    def __init__(self, message: str = "AI evidence analysis failed."):
        super().__init__(message)


def build_default_recommended_text(requirement: Optional[str]) -> str:
    """Copy-ready control statement template for a requirement."""
    statement = (requirement or "").strip() or "the stated control"
    return (
        f"Control Statement: {statement}\n"
        "Implementation Evidence: Describe the system/process, owner, and last review date.\n"
        "Artifacts: Link to policy/procedure, screenshot, or ticket proving execution."
    )


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text.strip()


def normalize_match_assessment(assessment: MatchAssessment, request: AnalyzeMatchRequest) -> MatchAssessment:
    """
    Fill gaps in a model assessment.

    - No relevant sections: take up to three document sentences that
      mention a requirement or hint token.
    - Not matching: default missing element, improvement suggestion and
      recommended text when the model gave none.
    - Matching: improvement suggestion and recommended text are cleared.
    """
    sections = assessment.relevant_sections
    if not sections:
        tokens = extract_tokens(request.requirement, distinct=True)
        for hint in request.hints:
            tokens.extend(extract_tokens(hint))
        sections = extract_relevant_sections(request.document_text, tokens)

    missing = assessment.missing_elements
    if not assessment.matches and not missing:
        missing = [DEFAULT_MISSING_ELEMENT]

    if assessment.matches:
        suggestion = None
        recommended = None
    else:
        suggestion = _clean(assessment.improvement_suggestion) or DEFAULT_IMPROVEMENT_SUGGESTION
        recommended = _clean(assessment.recommended_text) or build_default_recommended_text(request.requirement)

    return assessment.model_copy(update={
        "relevant_sections": list(sections),
        "missing_elements": list(missing),
        "improvement_suggestion": suggestion,
        "recommended_text": recommended,
    })


async def analyze_match(
    request: AnalyzeMatchRequest,
    llm: Any = None,
    timeout: Optional[float] = None
) -> MatchAssessment:
    """
    Evaluate whether a document satisfies a requirement.

    Args:
        request: Requirement, document text and optional hints
        llm: LLM to use (defaults to the configured provider)
        timeout: Provider call timeout in seconds

    Returns:
        Normalized MatchAssessment

    Raises:
        ValueError: If requirement or document text is blank
        EvidenceAnalysisError: If the provider is missing or fails
    """
    if not request.requirement.strip() or not request.document_text.strip():
        raise ValueError("Both requirement and document text must be provided for AI analysis.")

    llm = llm if llm is not None else get_default_llm()

    try:
        assessment = await request_structured(
            llm,
            MATCH_SYSTEM_PROMPT,
            build_match_prompt(request),
            MatchAssessment,
            timeout=timeout
        )
    except LLMProviderError as e:
        logger.error(f"LLM evidence analysis failed: {e}")
        raise EvidenceAnalysisError() from e

    return normalize_match_assessment(assessment, request)
