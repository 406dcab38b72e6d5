"""
Analysis Schemas

Data models for document insight and requirement matching.
"""

from typing import Literal, Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel, SnakeModel, none_as_empty_list


class DocumentAnalysisRequest(CamelModel):
    """A document submitted for keyword, coverage and risk analysis."""
    document_text: str = Field(default="", description="Raw document text")
    document_name: Optional[str] = Field(default=None, description="Display name")
    focus_areas: Optional[list[str]] = Field(
        default=None,
        description="Focus-area phrases used to scope coverage scoring; omitted means none were requested"
    )
    evidence_tags: list[str] = Field(default_factory=list, description="Evidence tags")

    @field_validator("document_text", mode="before")
    @classmethod
    def empty_text_for_null(cls, value):
        return "" if value is None else value

    @field_validator("evidence_tags", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class DocumentInsight(CamelModel):
    """Deterministic insight produced for one document."""
    document_name: str = Field(..., description="Document name")
    summary: str = Field(..., description="Short summary of the document")
    risk_level: Literal["unknown", "low", "medium", "high"] = Field(..., description="Risk band")
    keywords: list[str] = Field(default_factory=list, description="Top keywords by frequency")
    coverage_by_focus_area: dict[str, float] = Field(
        default_factory=dict,
        description="Coverage score per focus area, 0-1"
    )
    recommended_actions: list[str] = Field(default_factory=list, description="Next actions")
    key_findings: list[str] = Field(default_factory=list, description="Findings per focus area")


class AnalyzeMatchRequest(CamelModel):
    """A requirement to check against a document."""
    requirement: str = Field(default="", description="Requirement or control statement")
    document_text: str = Field(default="", description="Document text to evaluate")
    hints: list[str] = Field(
        default_factory=list,
        description="Reviewer hint phrases that bias section extraction"
    )

    @field_validator("requirement", "document_text", mode="before")
    @classmethod
    def empty_text_for_null(cls, value):
        return "" if value is None else value

    @field_validator("hints", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class MatchAssessment(SnakeModel):
    """Judgment on whether a document satisfies a requirement."""
    matches: bool = Field(default=False, description="Whether the requirement is satisfied")
    confidence: float = Field(default=0.0, ge=0.0, le=1.0, description="Confidence score, 0-1")
    reasoning: str = Field(default="", description="Explanation citing the document")
    relevant_sections: list[str] = Field(
        default_factory=list,
        description="Supporting excerpts from the document"
    )
    missing_elements: list[str] = Field(
        default_factory=list,
        description="What the document lacks"
    )
    improvement_suggestion: Optional[str] = Field(default=None, description="Short advice")
    recommended_text: Optional[str] = Field(default=None, description="Copy-ready snippet")

    @field_validator("relevant_sections", "missing_elements", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)

    @field_validator("reasoning", mode="before")
    @classmethod
    def reasoning_text(cls, value):
        return "" if value is None else value

    @field_validator("confidence", mode="before")
    @classmethod
    def confidence_fraction(cls, value):
        """Percent-style scores (1-100] become fractions; the result is clamped to [0, 1]."""
        if value is None:
            return 0.0
        try:
            score = float(value)
        except (TypeError, ValueError):
            return value
        if 1.0 < score <= 100.0:
            score /= 100.0
        return min(1.0, max(0.0, score))
