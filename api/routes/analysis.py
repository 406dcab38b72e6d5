"""
Analysis Routes

Document insight, requirement matching and gap analysis endpoints.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request

from agents import EvidenceAnalysisError, analyze_gaps, analyze_match
from api.dependencies import fetch_checklist, get_checklists, get_llm
from api.middleware.error_handler import ServiceUnavailableError, ValidationError
from api.middleware.rate_limit import LIMIT_ANALYSIS, limiter
from schemas.analysis import AnalyzeMatchRequest, DocumentAnalysisRequest, DocumentInsight, MatchAssessment
from schemas.gaps import GapAnalysisResponse
from services.checklist_client import ChecklistClient
from services.document_insights import analyze_document
from services.gap_analyzer import build_checklist_gaps, lookup_framework_gaps, resolve_framework_name

logger = logging.getLogger("evidence_analyzer.api.analysis")

router = APIRouter()


@router.post("/document", response_model=DocumentInsight)
async def analyze_document_route(payload: DocumentAnalysisRequest):
    """
    Summarize a document and highlight coverage gaps.

    Extracts keywords, scores focus-area coverage and derives a risk level.
    """
    if not payload.document_text.strip():
        raise ValidationError("DocumentText is required.")

    return analyze_document(payload)


@router.post("/match", response_model=MatchAssessment)
@limiter.limit(LIMIT_ANALYSIS)
async def analyze_match_route(
    request: Request,
    payload: AnalyzeMatchRequest,
    llm: Any = Depends(get_llm)
):
    """
    Analyze whether a document satisfies a compliance requirement.

    Returns 503 when the model cannot be reached; there is no heuristic fallback here.
    """
    if not payload.requirement.strip() or not payload.document_text.strip():
        raise ValidationError("Both requirement and documentText fields are required.")

    try:
        return await analyze_match(payload, llm=llm)
    except EvidenceAnalysisError as e:
        raise ServiceUnavailableError(str(e)) from e


@router.get("/gaps", response_model=GapAnalysisResponse)
@limiter.limit(LIMIT_ANALYSIS)
async def analyze_gaps_route(
    request: Request,
    framework: Optional[str] = Query(default=None),
    focus: Optional[str] = Query(default=None),
    checklist_id: Optional[int] = Query(default=None, alias="checklistId"),
    llm: Any = Depends(get_llm),
    checklists: ChecklistClient = Depends(get_checklists)
):
    """
    List unmet controls with a coverage summary.

    With ``checklistId`` the gaps come from the live checklist; otherwise
    from the curated catalog for ``framework`` (ISO 27001 or SOC 2),
    optionally narrowed by ``focus``.
    """
    if checklist_id is not None:
        checklist = await fetch_checklist(checklists, checklist_id)
        gaps = build_checklist_gaps(checklist)
        evidence = [
            snippet
            for item in checklist.items if item.status != "passed"
            for snippet in item.evidence
        ]
        label = checklist.name
    else:
        gaps = lookup_framework_gaps(framework, focus)
        evidence = []
        label = resolve_framework_name(framework)

    summary = await analyze_gaps([gap.description for gap in gaps], evidence, llm=llm)
    logger.info(f"Gap analysis for {label}: {len(gaps)} gaps ({summary.source} summary)")

    return GapAnalysisResponse(
        framework=label,
        generated_at=datetime.now(timezone.utc),
        gaps=gaps,
        ai_summary=summary,
    )
