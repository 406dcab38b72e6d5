"""
Gap Analysis Schemas

Data models for framework gap catalogs and requirement coverage summaries.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from schemas.base import CamelModel, SnakeModel, none_as_empty_list


ResultSource = Literal["ai", "heuristic"]


class GapInsight(CamelModel):
    """A known or detected gap against a control requirement."""
    requirement_id: str = Field(..., description="Control identifier (e.g., A.5.1)")
    category: str = Field(..., description="Control category")
    description: str = Field(..., description="What is missing")
    impact: Literal["High", "Medium"] = Field(..., description="Impact level")
    suggested_action: str = Field(..., description="Remediation action")
    evidence_hints: list[str] = Field(
        default_factory=list,
        description="Artifacts that would close the gap"
    )


class PriorityGap(SnakeModel):
    """A gap ranked for remediation."""
    requirement: str = Field(..., description="Requirement text")
    severity: str = Field(default="medium", description="Severity, lower-cased (e.g. critical, high, medium)")
    recommendation: str = Field(default="", description="Recommended remediation")

    @field_validator("severity", mode="before")
    @classmethod
    def lower_case_severity(cls, value):
        if isinstance(value, str):
            return value.strip().lower() or "medium"
        return "medium" if value is None else str(value).lower()


class GapAnalysisAiSummary(SnakeModel):
    """Coverage summary comparing requirements with evidence snippets."""
    uncovered_requirements: list[str] = Field(default_factory=list, description="Requirements with no evidence")
    partial_coverage: list[str] = Field(default_factory=list, description="Requirements with some evidence")
    priority_gaps: list[PriorityGap] = Field(default_factory=list, description="Gaps to fix first")
    next_steps: list[str] = Field(default_factory=list, description="Follow-up actions")
    source: ResultSource = Field(
        default="ai",
        exclude=True,
        description="Whether the model or the local heuristic produced this summary"
    )

    @field_validator("uncovered_requirements", "partial_coverage", "priority_gaps", "next_steps", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class GapAnalysisResponse(CamelModel):
    """Gap list for a framework or checklist plus the coverage summary."""
    framework: str = Field(..., description="Framework label or checklist name")
    generated_at: datetime = Field(..., description="Generation timestamp (UTC)")
    gaps: list[GapInsight] = Field(default_factory=list, description="Gap entries")
    ai_summary: GapAnalysisAiSummary = Field(
        default_factory=GapAnalysisAiSummary,
        description="Coverage summary"
    )
