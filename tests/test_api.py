import json

from api.dependencies import get_checklists
from api.main import app

MATCH_BODY = {
    "requirement": "Backups must be encrypted",
    "documentText": "Backups run nightly. Backup volumes use AES-256 encryption.",
    "hints": ["encryption"],
}


def test_root_and_health(client):
    root = client.get("/")
    assert root.status_code == 200
    assert "/analyze/match" in root.json()["endpoints"]

    health = client.get("/health")
    assert health.json()["status"] == "healthy"
    assert "X-Correlation-ID" in health.headers


def test_analyze_document(client):
    response = client.post("/analyze/document", json={
        "documentText": "Access reviews are performed quarterly. Encryption keys rotate yearly.",
        "documentName": "Access Policy",
        "focusAreas": ["access review", "incident response"],
        "evidenceTags": None,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["documentName"] == "Access Policy"
    assert body["riskLevel"] == "medium"
    assert body["coverageByFocusArea"] == {"access review": 1.0, "incident response": 0.0}
    assert len(body["keyFindings"]) == 2
    assert body["recommendedActions"][1].startswith("Strengthen documentation for incident response")


def test_analyze_document_blank_is_400(client):
    response = client.post("/analyze/document", json={"documentText": "   "})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_analyze_match(client, fake_llm):
    fake_llm.reply = json.dumps({
        "matches": True,
        "confidence": 0.92,
        "reasoning": "Backup volumes are encrypted with AES-256.",
        "relevant_sections": [],
        "missing_elements": [],
        "improvement_suggestion": "Mention key rotation.",
        "recommended_text": "Keys rotate yearly.",
    })

    response = client.post("/analyze/match", json=MATCH_BODY)

    assert response.status_code == 200
    body = response.json()
    assert body["matches"] is True
    assert body["confidence"] == 0.92
    assert body["relevant_sections"] == [
        "Backups run nightly.",
        "Backup volumes use AES-256 encryption.",
    ]
    assert body["improvement_suggestion"] is None
    assert body["recommended_text"] is None


def test_analyze_match_provider_failure_is_503(client, fake_llm):
    fake_llm.error = RuntimeError("502 Bad Gateway")

    response = client.post("/analyze/match", json=MATCH_BODY)

    assert response.status_code == 503
    assert response.json()["error"] == {
        "code": "SERVICE_UNAVAILABLE",
        "message": "AI evidence analysis failed.",
    }


def test_analyze_match_without_llm_is_503(offline_client):
    response = offline_client.post("/analyze/match", json=MATCH_BODY)
    assert response.status_code == 503


def test_analyze_match_blank_is_400(client, fake_llm):
    response = client.post("/analyze/match", json={"requirement": "  ", "documentText": "text"})

    assert response.status_code == 400
    assert fake_llm.calls == []


def test_catalog_gaps_with_heuristic_summary(offline_client):
    response = offline_client.get("/analyze/gaps", params={"framework": "soc2", "focus": "governance"})

    assert response.status_code == 200
    body = response.json()
    assert body["framework"] == "SOC2"
    assert [gap["requirementId"] for gap in body["gaps"]] == ["CC1.3"]
    assert body["gaps"][0]["evidenceHints"] == ["Risk register", "Owner assignment"]
    summary = body["aiSummary"]
    assert summary["uncovered_requirements"] == ["Risk register lacks owners for high impact items."]
    assert summary["priority_gaps"][0]["severity"] == "critical"
    assert "source" not in summary


def test_catalog_gaps_default_framework(offline_client):
    body = offline_client.get("/analyze/gaps").json()
    assert body["framework"] == "ISO-27001"
    assert len(body["gaps"]) == 3


def test_checklist_gaps(offline_client):
    response = offline_client.get("/analyze/gaps", params={"checklistId": 1})

    assert response.status_code == 200
    body = response.json()
    assert body["framework"] == "ISO Readiness"
    assert [gap["impact"] for gap in body["gaps"]] == ["High", "Medium", "Medium"]
    assert body["aiSummary"]["partial_coverage"] == ["Review privileged access quarterly"]


def test_checklist_gaps_unknown_checklist_is_404(offline_client):
    response = offline_client.get("/analyze/gaps", params={"checklistId": 99})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_gaps_use_provider_summary(client, fake_llm):
    fake_llm.reply = "```json\n" + json.dumps({
        "uncovered_requirements": ["Backup encryption settings vary across environments."],
        "partial_coverage": [],
        "priority_gaps": [],
        "next_steps": ["Standardize backup encryption"],
    }) + "\n```"

    body = client.get("/analyze/gaps", params={"framework": "iso-27001", "focus": "backup"}).json()

    assert [gap["requirementId"] for gap in body["gaps"]] == ["A.12.3"]
    assert body["aiSummary"]["next_steps"] == ["Standardize backup encryption"]


def test_compliance_report(client):
    response = client.get("/report/compliance/1")

    assert response.status_code == 200
    body = response.json()
    assert body["checklistName"] == "ISO Readiness"
    assert body["completionPercentage"] == 40.0
    assert body["pendingItems"] == 2
    assert body["categories"][0] == {"name": "Access Control", "total": 2, "passed": 1, "pending": 0, "failed": 1}


def test_compliance_report_unknown_checklist(client):
    assert client.get("/report/compliance/42").status_code == 404


def test_gap_report(offline_client):
    response = offline_client.get("/report/gaps/1")

    assert response.status_code == 200
    body = response.json()
    assert [gap["itemId"] for gap in body["gaps"]] == [11, 12, 13]
    assert body["aiSummary"]["uncovered_requirements"] == [
        "Rotate encryption keys quarterly",
        "Publish incident response plan",
    ]


def test_report_suggestions_fallback(offline_client):
    response = offline_client.post("/report/suggestions", json={"checklistId": 1, "focusAreas": None})

    assert response.status_code == 200
    body = response.json()
    assert body["executiveSummary"] == "ISO Readiness is 40.0% complete with 3 controls needing evidence."
    assert body["templateRecommendations"]
    assert "source" not in body


def test_report_suggestions_requires_checklist_id(client):
    response = client.post("/report/suggestions", json={})
    assert response.status_code == 422


def test_checklist_service_failure_is_502(offline_client, broken_checklist_client):
    app.dependency_overrides[get_checklists] = lambda: broken_checklist_client

    response = offline_client.get("/report/compliance/1")

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "UPSTREAM_ERROR"


def test_correlation_id_is_echoed(client):
    response = client.get("/health", headers={"X-Correlation-ID": "abc12345"})
    assert response.headers["X-Correlation-ID"] == "abc12345"
    assert float(response.headers["X-Response-Time-Ms"]) >= 0


def test_analyze_document_null_text_is_400(client):
    response = client.post("/analyze/document", json={"documentText": None})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_analyze_match_null_requirement_is_400(client, fake_llm):
    response = client.post("/analyze/match", json={"requirement": None, "documentText": "x"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert fake_llm.calls == []
