import httpx
import pytest

from conftest import run
from services.checklist_client import ChecklistClient, ChecklistServiceError

CHECKLIST = {
    "id": 1,
    "name": "ISO Readiness",
    "items": [
        {
            "id": 10,
            "category": "Access Control",
            "requirement": "Enforce MFA for admin accounts",
            "hints": ["MFA policy"],
            "status": "FAILED",
            "evidence": [],
        }
    ],
}

PROGRESS = {
    "checklistId": 1,
    "name": "ISO Readiness",
    "totalItems": 1,
    "passedItems": 0,
    "completionPercentage": 0.0,
}


def handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/checklists/1":
        return httpx.Response(200, json=CHECKLIST)
    if request.url.path == "/api/checklists/1/progress":
        return httpx.Response(200, json=PROGRESS)
    if request.url.path == "/api/checklists/500":
        return httpx.Response(500, text="boom")
    return httpx.Response(404)


def make_client(transport_handler=handler) -> ChecklistClient:
    return ChecklistClient(
        base_url="http://checklists.test",
        checklists_path="/api/checklists",
        progress_path_template="/api/checklists/{checklist_id}/progress",
        transport=httpx.MockTransport(transport_handler),
    )


def test_get_checklist():
    checklist = run(make_client().get_checklist(1))

    assert checklist.name == "ISO Readiness"
    assert checklist.items[0].status == "failed"
    assert checklist.items[0].hints == ["MFA policy"]


def test_get_progress():
    progress = run(make_client().get_progress(1))
    assert progress.checklist_id == 1
    assert progress.total_items == 1


def test_missing_checklist_is_none():
    client = make_client()
    assert run(client.get_checklist(99)) is None
    assert run(client.get_progress(99)) is None


def test_server_error_raises():
    with pytest.raises(ChecklistServiceError):
        run(make_client().get_checklist(500))


def test_transport_error_raises():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ChecklistServiceError):
        run(make_client(refuse).get_checklist(1))


def test_unexpected_payload_raises():
    def garbage(request):
        return httpx.Response(200, json={"name": "no id"})

    with pytest.raises(ChecklistServiceError):
        run(make_client(garbage).get_checklist(1))
