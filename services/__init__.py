"""
Evidence Analyzer - Services Package

Deterministic text heuristics, gap analysis, reporting and the checklist client.
"""

from services.text_analysis import (
    split_sentences,
    extract_tokens,
    rank_keywords,
    score_coverage,
    extract_relevant_sections,
)
from services.document_insights import analyze_document, determine_risk_level
from services.gap_analyzer import (
    lookup_framework_gaps,
    resolve_framework_name,
    build_checklist_gaps,
    heuristic_gap_analysis,
)
from services.reporting import (
    build_compliance_report,
    collect_gap_items,
    build_gap_report,
    build_suggestion_fallback,
)
from services.checklist_client import (
    ChecklistClient,
    ChecklistServiceError,
    get_checklist_client,
)

__all__ = [
    "split_sentences",
    "extract_tokens",
    "rank_keywords",
    "score_coverage",
    "extract_relevant_sections",
    "analyze_document",
    "determine_risk_level",
    "lookup_framework_gaps",
    "resolve_framework_name",
    "build_checklist_gaps",
    "heuristic_gap_analysis",
    "build_compliance_report",
    "collect_gap_items",
    "build_gap_report",
    "build_suggestion_fallback",
    "ChecklistClient",
    "ChecklistServiceError",
    "get_checklist_client",
]
