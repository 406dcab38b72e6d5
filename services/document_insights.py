"""
Document Insights Service

Builds a deterministic summary, risk level, findings and recommended actions
for a single document from its keywords and focus-area coverage.
"""

from typing import Optional

from schemas.analysis import DocumentAnalysisRequest, DocumentInsight
from services.text_analysis import rank_keywords, score_coverage, split_sentences

DEFAULT_DOCUMENT_NAME = "Uploaded Document"
EMPTY_SUMMARY = "No content provided for analysis."
EMPTY_FINDING = "Document was empty or unreadable."
NO_FOCUS_FINDING = "No focus areas provided. Consider specifying controls to evaluate."

SUMMARY_SENTENCES = 3
SUMMARY_EXCERPT_LENGTH = 220

LOW_RISK_THRESHOLD = 0.75
MEDIUM_RISK_THRESHOLD = 0.45
WEAK_COVERAGE_THRESHOLD = 0.5
MAX_AREA_ACTIONS = 3

# (minimum score, descriptor), checked in order
FINDING_BANDS = (
    (0.8, "Strong evidence of"),
    (0.5, "Partial coverage of"),
    (0.3, "Limited references to"),
)
MISSING_DESCRIPTOR = "Missing detail for"

RISK_ACTIONS = {
    "low": "Maintain current control coverage and document review cadence.",
    "medium": "Add concrete evidence (screenshots, policy IDs) for partially covered controls.",
}
HIGH_RISK_ACTION = "Provide explicit procedures, owners, and evidence for each missing control."


def build_summary(document: str) -> str:
    """First three sentences, or a truncated excerpt when there are no sentence boundaries."""
    if not document.strip():
        return EMPTY_SUMMARY

    sentences = split_sentences(document)[:SUMMARY_SENTENCES]
    if not sentences:
        if len(document) > SUMMARY_EXCERPT_LENGTH:
            return document[:SUMMARY_EXCERPT_LENGTH] + "..."
        return document

    return " ".join(sentences)


def determine_risk_level(average_coverage: float) -> str:
    """Map an average coverage score to a risk band."""
    if average_coverage >= LOW_RISK_THRESHOLD:
        return "low"
    if average_coverage >= MEDIUM_RISK_THRESHOLD:
        return "medium"
    return "high"


def _describe(score: float) -> str:
    for minimum, descriptor in FINDING_BANDS:
        if score >= minimum:
            return descriptor
    return MISSING_DESCRIPTOR


def build_key_findings(document: str, coverage: dict[str, float]) -> list[str]:
    """One finding per coverage entry, phrased by score band."""
    if not document.strip():
        return [EMPTY_FINDING]

    findings = [
        f"{_describe(score)} {area} controls (score {score:.0%})."
        for area, score in coverage.items()
    ]
    return findings or [NO_FOCUS_FINDING]


def build_recommendations(
    risk_level: str,
    coverage: dict[str, float],
    focus_areas: Optional[list[str]]
) -> list[str]:
    """
    A risk-level action followed by up to three weak-area actions.

    Weak-area actions are added whenever the caller sent a focus-area list,
    even an empty one; an omitted list adds none.
    """
    actions = [RISK_ACTIONS.get(risk_level, HIGH_RISK_ACTION)]

    if focus_areas is not None:
        weak_areas = [area for area, score in coverage.items() if score < WEAK_COVERAGE_THRESHOLD]
        for area in weak_areas[:MAX_AREA_ACTIONS]:
            actions.append(f"Strengthen documentation for {area}: coverage is below 50%.")

    return actions


def analyze_document(request: DocumentAnalysisRequest) -> DocumentInsight:
    """
    Analyze a document against its focus areas.

    Args:
        request: Document text, optional name and focus areas

    Returns:
        DocumentInsight with summary, risk level, keywords, coverage,
        findings and recommended actions
    """
    document = (request.document_text or "").strip()

    coverage = score_coverage(document, request.focus_areas)
    if document:
        average = sum(coverage.values()) / len(coverage) if coverage else 0.0
        risk_level = determine_risk_level(average)
    else:
        risk_level = "unknown"

    document_name = (request.document_name or "").strip() or DEFAULT_DOCUMENT_NAME

    return DocumentInsight(
        document_name=document_name,
        summary=build_summary(document),
        risk_level=risk_level,
        keywords=rank_keywords(document),
        coverage_by_focus_area=coverage,
        recommended_actions=build_recommendations(risk_level, coverage, request.focus_areas),
        key_findings=build_key_findings(document, coverage),
    )
