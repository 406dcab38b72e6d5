"""
Checklist Schemas

Read-only snapshots of the checklist service payloads.
"""

from typing import Optional

from pydantic import Field, field_validator

from schemas.base import CamelModel, none_as_empty_list


class ChecklistItemSnapshot(CamelModel):
    """A single checklist item as reported by the checklist service."""
    id: int = Field(..., description="Item id")
    category: str = Field(default="", description="Control category")
    requirement: str = Field(default="", description="Requirement text")
    status: str = Field(default="pending", description="pending, passed or failed")
    hints: list[str] = Field(default_factory=list, description="Hint phrases")
    evidence: list[str] = Field(default_factory=list, description="Evidence snippets")

    @field_validator("category", "requirement", mode="before")
    @classmethod
    def empty_text_for_null(cls, value):
        return "" if value is None else value

    @field_validator("status", mode="before")
    @classmethod
    def lower_case_status(cls, value):
        return "pending" if value is None else str(value).strip().lower()

    @field_validator("hints", "evidence", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class ChecklistSnapshot(CamelModel):
    """A checklist with its items."""
    id: int = Field(..., description="Checklist id")
    name: str = Field(default="", description="Checklist name")
    items: list[ChecklistItemSnapshot] = Field(default_factory=list, description="Checklist items")

    @field_validator("items", mode="before")
    @classmethod
    def empty_list_for_null(cls, value):
        return none_as_empty_list(value)


class ChecklistProgress(CamelModel):
    """Completion figures for a checklist."""
    checklist_id: int = Field(..., description="Checklist id")
    name: Optional[str] = Field(default=None, description="Checklist name")
    total_items: int = Field(default=0, description="Total items")
    passed_items: int = Field(default=0, description="Passed items")
    completion_percentage: float = Field(default=0.0, description="Completion, 0-100")
