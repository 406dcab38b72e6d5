"""
Evidence Analyzer - Pydantic Schemas

Data models for document analysis, requirement matching, gaps and reports.
"""

from schemas.base import CamelModel, SnakeModel
from schemas.analysis import (
    DocumentAnalysisRequest,
    DocumentInsight,
    AnalyzeMatchRequest,
    MatchAssessment,
)
from schemas.gaps import (
    GapInsight,
    PriorityGap,
    GapAnalysisAiSummary,
    GapAnalysisResponse,
)
from schemas.checklist import (
    ChecklistItemSnapshot,
    ChecklistSnapshot,
    ChecklistProgress,
)
from schemas.report import (
    CategorySummary,
    ComplianceReportResponse,
    GapItem,
    GapReportResponse,
    ReportSuggestionRequest,
    ReportSuggestionResponse,
)

__all__ = [
    # Base
    "CamelModel",
    "SnakeModel",
    # Analysis
    "DocumentAnalysisRequest",
    "DocumentInsight",
    "AnalyzeMatchRequest",
    "MatchAssessment",
    # Gaps
    "GapInsight",
    "PriorityGap",
    "GapAnalysisAiSummary",
    "GapAnalysisResponse",
    # Checklist
    "ChecklistItemSnapshot",
    "ChecklistSnapshot",
    "ChecklistProgress",
    # Reports
    "CategorySummary",
    "ComplianceReportResponse",
    "GapItem",
    "GapReportResponse",
    "ReportSuggestionRequest",
    "ReportSuggestionResponse",
]
