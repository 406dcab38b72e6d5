"""
API Dependencies

Injectable collaborators so routes can be exercised with fakes.
"""

from typing import Any, Optional

from agents.base import get_default_llm
from api.middleware.error_handler import NotFoundError, UpstreamServiceError
from schemas.checklist import ChecklistProgress, ChecklistSnapshot
from services.checklist_client import ChecklistClient, ChecklistServiceError, get_checklist_client


def get_llm() -> Optional[Any]:
    """The configured LLM, or None when no API key is set."""
    return get_default_llm()


def get_checklists() -> ChecklistClient:
    return get_checklist_client()


async def fetch_checklist(client: ChecklistClient, checklist_id: int) -> ChecklistSnapshot:
    """
    Load a checklist snapshot or fail the request.

    Raises:
        NotFoundError: If the checklist does not exist
        UpstreamServiceError: If the checklist service fails
    """
    try:
        checklist = await client.get_checklist(checklist_id)
    except ChecklistServiceError as e:
        raise UpstreamServiceError(str(e)) from e

    if checklist is None:
        raise NotFoundError("Checklist not found")
    return checklist


async def fetch_progress(client: ChecklistClient, checklist_id: int) -> Optional[ChecklistProgress]:
    try:
        return await client.get_progress(checklist_id)
    except ChecklistServiceError as e:
        raise UpstreamServiceError(str(e)) from e
