import asyncio
import os
import time

# Keep tests offline and off the filesystem before settings are loaded
os.environ["OPENAI_API_KEY"] = ""
os.environ["LLM_PROVIDER"] = "openai"
os.environ["LOG_TO_FILE"] = "false"

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_checklists, get_llm
from api.main import app
from api.middleware.rate_limit import limiter
from schemas.checklist import ChecklistProgress, ChecklistSnapshot
from services.checklist_client import ChecklistServiceError


class FakeLLM:
    """Stands in for crewai.LLM: records messages and replies with canned text."""

    def __init__(self, reply=None, error=None, delay=0.0):
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = []

    def call(self, messages):
        self.calls.append(messages)
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeChecklistClient:
    def __init__(self, checklists=None, progress=None, error=None):
        self.checklists = checklists or {}
        self.progress = progress or {}
        self.error = error

    async def get_checklist(self, checklist_id):
        if self.error is not None:
            raise self.error
        return self.checklists.get(checklist_id)

    async def get_progress(self, checklist_id):
        if self.error is not None:
            raise self.error
        return self.progress.get(checklist_id)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def checklist():
    return ChecklistSnapshot.model_validate({
        "id": 1,
        "name": "ISO Readiness",
        "items": [
            {
                "id": 10,
                "category": "Access Control",
                "requirement": "Enforce MFA for admin accounts",
                "status": "PASSED",
                "hints": ["MFA policy"],
                "evidence": ["MFA enforced via Okta for all admins"],
            },
            {
                "id": 11,
                "category": "Access Control",
                "requirement": "Review privileged access quarterly",
                "status": "FAILED",
                "hints": ["Access review log", "Ticket", "Sign-off", "Screenshot"],
                "evidence": ["Access review performed in January"],
            },
            {
                "id": 12,
                "category": "Backup",
                "requirement": "Rotate encryption keys quarterly",
                "status": "PENDING",
                "hints": [],
                "evidence": [],
            },
            {
                "id": 13,
                "category": None,
                "requirement": "Publish incident response plan",
                "status": "pending",
                "hints": None,
                "evidence": None,
            },
        ],
    })


@pytest.fixture
def progress():
    return ChecklistProgress.model_validate({
        "checklistId": 1,
        "name": "ISO Readiness",
        "totalItems": 4,
        "passedItems": 1,
        "completionPercentage": 40.0,
    })


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def checklist_client(checklist, progress):
    return FakeChecklistClient({1: checklist}, {1: progress})


@pytest.fixture
def client(fake_llm, checklist_client):
    limiter.enabled = False
    app.dependency_overrides[get_llm] = lambda: fake_llm
    app.dependency_overrides[get_checklists] = lambda: checklist_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def offline_client(checklist_client):
    """Client with no LLM configured."""
    limiter.enabled = False
    app.dependency_overrides[get_llm] = lambda: None
    app.dependency_overrides[get_checklists] = lambda: checklist_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def broken_checklist_client():
    return FakeChecklistClient(error=ChecklistServiceError("Checklist service unavailable: connection refused"))
