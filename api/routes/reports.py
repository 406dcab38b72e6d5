"""
Report Routes

Checklist compliance summaries, gap reports and improvement suggestions.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from agents import analyze_gaps, generate_suggestions
from api.dependencies import fetch_checklist, fetch_progress, get_checklists, get_llm
from api.middleware.rate_limit import LIMIT_ANALYSIS, limiter
from schemas.report import (
    ComplianceReportResponse,
    GapReportResponse,
    ReportSuggestionRequest,
    ReportSuggestionResponse,
)
from services.checklist_client import ChecklistClient
from services.reporting import build_compliance_report, build_gap_report, collect_gap_items

logger = logging.getLogger("evidence_analyzer.api.reports")

router = APIRouter()


@router.get("/compliance/{checklist_id}", response_model=ComplianceReportResponse)
async def get_compliance_report(
    checklist_id: int,
    checklists: ChecklistClient = Depends(get_checklists)
):
    """Aggregate checklist status counts, category breakdowns and next actions."""
    checklist = await fetch_checklist(checklists, checklist_id)
    progress = await fetch_progress(checklists, checklist_id)
    return build_compliance_report(checklist, progress)


@router.get("/gaps/{checklist_id}", response_model=GapReportResponse)
@limiter.limit(LIMIT_ANALYSIS)
async def get_gap_report(
    request: Request,
    checklist_id: int,
    llm: Any = Depends(get_llm),
    checklists: ChecklistClient = Depends(get_checklists)
):
    """Outstanding checklist items plus prioritized recommendations."""
    checklist = await fetch_checklist(checklists, checklist_id)
    gaps = collect_gap_items(checklist)

    summary = await analyze_gaps(
        [gap.requirement for gap in gaps],
        [snippet for gap in gaps for snippet in gap.evidence],
        llm=llm
    )
    logger.info(f"Gap report for checklist {checklist_id}: {len(gaps)} open items ({summary.source} summary)")

    return build_gap_report(checklist, gaps, summary)


@router.post("/suggestions", response_model=ReportSuggestionResponse)
@limiter.limit(LIMIT_ANALYSIS)
async def post_report_suggestions(
    request: Request,
    payload: ReportSuggestionRequest,
    llm: Any = Depends(get_llm),
    checklists: ChecklistClient = Depends(get_checklists)
):
    """Quick wins, remediation plan, templates and best practices for a checklist."""
    checklist = await fetch_checklist(checklists, payload.checklist_id)
    progress = await fetch_progress(checklists, payload.checklist_id)

    suggestions = await generate_suggestions(payload, checklist, progress, llm=llm)
    logger.info(f"Suggestions for checklist {payload.checklist_id} ({suggestions.source})")
    return suggestions
