"""
Report Schemas

Data models for checklist compliance reports, gap reports and improvement suggestions.
"""

from typing import Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel, none_as_empty_list
from schemas.gaps import GapAnalysisAiSummary, ResultSource


class CategorySummary(CamelModel):
    """Status counts for one checklist category."""
    name: str
    total: int = 0
    passed: int = 0
    pending: int = 0
    failed: int = 0


class ComplianceReportResponse(CamelModel):
    """Compliance summary for a checklist."""
    checklist_id: int = Field(..., description="Checklist id")
    checklist_name: str = Field(..., description="Checklist name")
    total_items: int = Field(default=0, description="Total items")
    passed_items: int = Field(default=0, description="Passed items")
    pending_items: int = Field(default=0, description="Items neither passed nor failed")
    failed_items: int = Field(default=0, description="Failed items")
    completion_percentage: float = Field(default=0.0, description="Completion, 0-100")
    categories: list[CategorySummary] = Field(default_factory=list, description="Per-category counts")
    next_actions: list[str] = Field(default_factory=list, description="Suggested next actions")


class GapItem(CamelModel):
    """An outstanding (not passed) checklist item."""
    item_id: int
    category: str = ""
    requirement: str = ""
    status: str = "pending"
    hints: list[str] = Field(default_factory=list)
    evidence: list[str] = Field(default_factory=list)


class GapReportResponse(CamelModel):
    """Outstanding items for a checklist plus the coverage summary."""
    checklist_id: int
    checklist_name: str
    gaps: list[GapItem] = Field(default_factory=list)
    ai_summary: GapAnalysisAiSummary = Field(default_factory=GapAnalysisAiSummary)


class ReportSuggestionRequest(CamelModel):
    """Request for improvement suggestions on a checklist."""
    checklist_id: int = Field(..., description="Checklist id")
    audience: Optional[str] = Field(default=None, description="Target audience")
    focus_areas: list[str] = Field(default_factory=list, description="Focus areas")
    evidence_highlights: list[str] = Field(default_factory=list, description="Notable evidence")
    tone: Optional[str] = Field(default=None, description="Writing tone")

    @field_validator("focus_areas", "evidence_highlights", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class ReportSuggestionResponse(CamelModel):
    """Improvement suggestions for a checklist."""
    executive_summary: str = Field(default="", description="One-line status summary")
    quick_wins: list[str] = Field(default_factory=list, description="Low-effort improvements")
    remediation_plan: list[str] = Field(default_factory=list, description="Remediation steps")
    template_recommendations: list[str] = Field(default_factory=list, description="Useful templates")
    best_practices: list[str] = Field(default_factory=list, description="Ongoing practices")
    source: ResultSource = Field(
        default="ai",
        exclude=True,
        description="Whether the model or the local fallback produced these suggestions"
    )

    @field_validator("quick_wins", "remediation_plan", "template_recommendations", "best_practices", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)

    @field_validator("executive_summary", mode="before")
    @classmethod
    def summary_text(cls, value):
        return "" if value is None else value
