"""
Evidence Analyzer - Agents Package

Model-backed analyzers for evidence matching, gap analysis and suggestions.
"""

from agents.base import (
    LLMProviderError,
    get_llm,
    get_default_llm,
    extract_json_payload,
    parse_model_output,
    request_structured,
)
from agents.evidence_agent import (
    EvidenceAnalysisError,
    analyze_match,
    normalize_match_assessment,
)
from agents.gap_agent import analyze_gaps, normalize_gap_summary
from agents.suggestion_agent import generate_suggestions

__all__ = [
    # Base
    "LLMProviderError",
    "get_llm",
    "get_default_llm",
    "extract_json_payload",
    "parse_model_output",
    "request_structured",
    # Evidence matching
    "EvidenceAnalysisError",
    "analyze_match",
    "normalize_match_assessment",
    # Gap analysis
    "analyze_gaps",
    "normalize_gap_summary",
    # Suggestions
    "generate_suggestions",
]
