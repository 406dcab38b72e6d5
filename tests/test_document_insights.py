import pytest

from schemas.analysis import DocumentAnalysisRequest
from services.document_insights import (
    EMPTY_FINDING,
    EMPTY_SUMMARY,
    HIGH_RISK_ACTION,
    NO_FOCUS_FINDING,
    analyze_document,
    build_key_findings,
    build_summary,
    determine_risk_level,
)

DOCUMENT = "Access reviews are performed quarterly. Encryption keys rotate yearly."


def test_analyze_document_with_focus_areas():
    insight = analyze_document(DocumentAnalysisRequest(
        document_text=DOCUMENT,
        document_name="  Access Policy.pdf ",
        focus_areas=["access review", "incident response"],
    ))

    assert insight.document_name == "Access Policy.pdf"
    assert insight.summary == DOCUMENT
    assert insight.coverage_by_focus_area == {"access review": 1.0, "incident response": 0.0}
    assert insight.risk_level == "medium"
    assert insight.keywords == ["Access", "Encryption", "Keys", "Performed", "Quarterly", "Reviews"]
    assert insight.key_findings == [
        "Strong evidence of access review controls (score 100%).",
        "Missing detail for incident response controls (score 0%).",
    ]
    assert insight.recommended_actions == [
        "Add concrete evidence (screenshots, policy IDs) for partially covered controls.",
        "Strengthen documentation for incident response: coverage is below 50%.",
    ]


def test_analyze_document_empty_text():
    insight = analyze_document(DocumentAnalysisRequest(document_text="   "))

    assert insight.document_name == "Uploaded Document"
    assert insight.summary == EMPTY_SUMMARY
    assert insight.risk_level == "unknown"
    assert insight.keywords == []
    assert insight.coverage_by_focus_area == {"general": 0.0}
    assert insight.key_findings == [EMPTY_FINDING]
    assert insight.recommended_actions == [HIGH_RISK_ACTION]


def test_analyze_document_without_focus_uses_general_coverage():
    insight = analyze_document(DocumentAnalysisRequest(document_text=DOCUMENT))

    assert list(insight.coverage_by_focus_area) == ["general"]
    assert insight.risk_level == "high"
    assert insight.key_findings == ["Missing detail for general controls (score 2%)."]
    # Weak-area actions only apply to caller-supplied focus areas
    assert insight.recommended_actions == [HIGH_RISK_ACTION]


def test_analyze_document_low_risk():
    insight = analyze_document(DocumentAnalysisRequest(
        document_text=DOCUMENT,
        focus_areas=["encryption keys"],
    ))
    assert insight.risk_level == "low"
    assert insight.recommended_actions == ["Maintain current control coverage and document review cadence."]


def test_analyze_document_limits_area_actions_to_three():
    insight = analyze_document(DocumentAnalysisRequest(
        document_text=DOCUMENT,
        focus_areas=["incident response", "vendor management", "physical security", "business continuity"],
    ))
    assert insight.risk_level == "high"
    assert len(insight.recommended_actions) == 4
    assert insight.recommended_actions[0] == HIGH_RISK_ACTION


def test_analyze_document_is_idempotent():
    request = DocumentAnalysisRequest(document_text=DOCUMENT, focus_areas=["access review"])
    assert analyze_document(request) == analyze_document(request)


def test_summary_takes_first_three_sentences():
    text = "One fact. Two facts. Three facts. Four facts."
    assert build_summary(text) == "One fact. Two facts. Three facts."


@pytest.mark.parametrize("average,expected", [
    (1.0, "low"),
    (0.75, "low"),
    (0.7499, "medium"),
    (0.45, "medium"),
    (0.449, "high"),
    (0.0, "high"),
])
def test_risk_level_boundaries(average, expected):
    assert determine_risk_level(average) == expected


@pytest.mark.parametrize("score,descriptor", [
    (0.8, "Strong evidence of"),
    (0.5, "Partial coverage of"),
    (0.3, "Limited references to"),
    (0.29, "Missing detail for"),
])
def test_key_finding_bands(score, descriptor):
    findings = build_key_findings("text", {"logging": score})
    assert findings == [f"{descriptor} logging controls (score {score:.0%})."]


def test_key_findings_placeholder_for_empty_coverage():
    assert build_key_findings("text", {}) == [NO_FOCUS_FINDING]


def test_explicit_empty_focus_list_adds_general_action():
    insight = analyze_document(DocumentAnalysisRequest(document_text=DOCUMENT, focus_areas=[]))

    assert insight.coverage_by_focus_area == {"general": 0.02}
    assert insight.recommended_actions == [
        HIGH_RISK_ACTION,
        "Strengthen documentation for general: coverage is below 50%.",
    ]


def test_null_focus_list_means_omitted():
    request = DocumentAnalysisRequest.model_validate({"documentText": DOCUMENT, "focusAreas": None})
    assert analyze_document(request).recommended_actions == [HIGH_RISK_ACTION]
