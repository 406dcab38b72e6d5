"""
Reporting Service

Aggregates checklist snapshots into compliance reports, gap reports and
fallback improvement suggestions.
"""

from typing import Optional

from schemas.checklist import ChecklistProgress, ChecklistSnapshot
from schemas.gaps import GapAnalysisAiSummary
from schemas.report import (
    CategorySummary,
    ComplianceReportResponse,
    GapItem,
    GapReportResponse,
    ReportSuggestionResponse,
)

UNCATEGORIZED = "Uncategorized"


def _completion(checklist: ChecklistSnapshot, progress: Optional[ChecklistProgress]) -> float:
    """Completion percentage from progress when known, else passed/total."""
    if progress is not None:
        return progress.completion_percentage
    total = len(checklist.items)
    passed = sum(1 for item in checklist.items if item.status == "passed")
    return 0.0 if total == 0 else passed * 100.0 / total


def build_compliance_report(
    checklist: ChecklistSnapshot,
    progress: Optional[ChecklistProgress] = None
) -> ComplianceReportResponse:
    """
    Summarize checklist status counts by category.

    Items that are neither passed nor failed count as pending.
    """
    total = len(checklist.items)
    passed = sum(1 for item in checklist.items if item.status == "passed")
    failed = sum(1 for item in checklist.items if item.status == "failed")
    pending = total - passed - failed

    groups: dict[str, list] = {}
    for item in checklist.items:
        name = item.category if item.category and item.category.strip() else UNCATEGORIZED
        groups.setdefault(name, []).append(item)

    categories = [
        CategorySummary(
            name=name,
            total=len(items),
            passed=sum(1 for i in items if i.status == "passed"),
            pending=sum(1 for i in items if i.status == "pending"),
            failed=sum(1 for i in items if i.status == "failed"),
        )
        for name, items in groups.items()
    ]

    next_actions = [
        "Attach recent evidence (policy IDs, screenshots) to pending controls."
        if pending > 0 else "Maintain evidence freshness with quarterly reviews.",
        "Hold remediation stand-ups for failed controls within 7 days."
        if failed > 0 else "Celebrate passing status and schedule spot checks.",
    ]

    return ComplianceReportResponse(
        checklist_id=checklist.id,
        checklist_name=checklist.name,
        total_items=total,
        passed_items=passed,
        pending_items=pending,
        failed_items=failed,
        completion_percentage=round(_completion(checklist, progress), 2),
        categories=categories,
        next_actions=next_actions,
    )


def collect_gap_items(checklist: ChecklistSnapshot) -> list[GapItem]:
    """Checklist items that have not passed."""
    return [
        GapItem(
            item_id=item.id,
            category=item.category,
            requirement=item.requirement,
            status=item.status,
            hints=item.hints,
            evidence=item.evidence,
        )
        for item in checklist.items
        if item.status != "passed"
    ]


def build_gap_report(
    checklist: ChecklistSnapshot,
    gaps: list[GapItem],
    ai_summary: GapAnalysisAiSummary
) -> GapReportResponse:
    return GapReportResponse(
        checklist_id=checklist.id,
        checklist_name=checklist.name,
        gaps=gaps,
        ai_summary=ai_summary,
    )


def build_suggestion_fallback(
    checklist: ChecklistSnapshot,
    progress: Optional[ChecklistProgress] = None
) -> ReportSuggestionResponse:
    """Generic improvement suggestions used when the model is unavailable."""
    total = len(checklist.items)
    completed = sum(1 for item in checklist.items if item.status == "passed")
    pending = total - completed
    completion = _completion(checklist, progress)

    return ReportSuggestionResponse(
        executive_summary=f"{checklist.name} is {completion:.1f}% complete with {pending} controls needing evidence.",
        quick_wins=[
            "Close easy wins by attaching current policies and screenshots to pending controls.",
            "Log decisions inside the evidence register to avoid rework.",
        ],
        remediation_plan=[
            "Assign control owners for each open item and track due dates in a Kanban board.",
            "Schedule a brown-bag session to walk stakeholders through evidence expectations.",
        ],
        template_recommendations=[
            "Password Policy Template (ISO-aligned)",
            "Incident Postmortem Template",
        ],
        best_practices=[
            "Review controls quarterly and update evidence immediately after changes.",
            "Store artifacts in versioned folders with clear owners.",
        ],
        source="heuristic",
    )
