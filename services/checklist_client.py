"""
Checklist Service Client

Read-only HTTP client for the checklist-management service.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError as SchemaValidationError

from config.settings import settings
from schemas.checklist import ChecklistProgress, ChecklistSnapshot

logger = logging.getLogger("evidence_analyzer.services.checklist")


class ChecklistServiceError(Exception):
    """The checklist service could not be reached or returned an unusable response."""


class ChecklistClient:
    """
    Fetches checklist snapshots and progress by id.

    A 404 from the service is reported as ``None``; every other failure
    raises ChecklistServiceError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        checklists_path: Optional[str] = None,
        progress_path_template: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = (base_url or settings.checklist_service_url).rstrip("/") + "/"
        self.checklists_path = checklists_path or settings.checklists_path
        self.progress_path_template = progress_path_template or settings.progress_path_template
        self.timeout = timeout or settings.checklist_timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport
        )

    async def _get_json(self, path: str) -> Optional[dict]:
        async with self._client() as client:
            try:
                response = await client.get(path.lstrip("/"))
            except httpx.HTTPError as e:
                logger.error(f"Checklist service request failed for {path}: {e}")
                raise ChecklistServiceError(f"Checklist service unavailable: {e}") from e

        if response.status_code == 404:
            return None
        if response.is_error:
            logger.error(f"Checklist service returned {response.status_code} for {path}")
            raise ChecklistServiceError(f"Checklist service returned {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ChecklistServiceError("Checklist service returned invalid JSON") from e

    async def get_checklist(self, checklist_id: int) -> Optional[ChecklistSnapshot]:
        """Get a checklist with its items, or None if it does not exist."""
        data = await self._get_json(f"{self.checklists_path.rstrip('/')}/{checklist_id}")
        if data is None:
            return None
        try:
            return ChecklistSnapshot.model_validate(data)
        except SchemaValidationError as e:
            raise ChecklistServiceError(f"Unexpected checklist payload: {e}") from e

    async def get_progress(self, checklist_id: int) -> Optional[ChecklistProgress]:
        """Get completion figures for a checklist, or None if unknown."""
        data = await self._get_json(self.progress_path_template.format(checklist_id=checklist_id))
        if data is None:
            return None
        try:
            return ChecklistProgress.model_validate(data)
        except SchemaValidationError as e:
            raise ChecklistServiceError(f"Unexpected progress payload: {e}") from e


_client: Optional[ChecklistClient] = None


def get_checklist_client() -> ChecklistClient:
    """Get the shared checklist client (lazy initialization)."""
    global _client
    if _client is None:
        _client = ChecklistClient()
    return _client
