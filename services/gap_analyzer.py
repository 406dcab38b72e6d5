"""
Gap Analyzer Service

Static framework gap catalog, live checklist gaps, and the heuristic
requirement-vs-evidence coverage summary used when the model is unavailable.

The heuristic treats a requirement token appearing as a substring of an
evidence snippet as coverage. It is a keyword proxy, not comprehension:
"admin" counts as covered by "administrators", and a requirement phrased
with different vocabulary than its evidence will look uncovered.
"""

from types import MappingProxyType
from typing import Iterable, Optional

from schemas.checklist import ChecklistSnapshot
from schemas.gaps import GapAnalysisAiSummary, GapInsight, PriorityGap
from services.text_analysis import extract_tokens

DEFAULT_FRAMEWORK = "ISO-27001"

GAP_CATALOG = MappingProxyType({
    "iso-27001": (
        GapInsight(
            requirement_id="A.5.1",
            category="Policies",
            description="Information security policy is not formally approved or reviewed annually.",
            impact="High",
            suggested_action="Publish the current ISMS policy with executive approval and circulate to stakeholders.",
            evidence_hints=["Policy approval memo", "Annual review tracker"],
        ),
        GapInsight(
            requirement_id="A.6.2",
            category="Access Control",
            description="Privileged access reviews are ad-hoc with no evidence trail.",
            impact="Medium",
            suggested_action="Implement quarterly privileged access recertification with sign-off.",
            evidence_hints=["Access review log", "ServiceNow ticket"],
        ),
        GapInsight(
            requirement_id="A.12.3",
            category="Backup",
            description="Backup encryption settings vary across environments.",
            impact="High",
            suggested_action="Standardize encryption-in-transit and at-rest policies for all backup targets.",
            evidence_hints=["Backup config export", "Encryption screenshots"],
        ),
    ),
    "soc2": (
        GapInsight(
            requirement_id="CC1.3",
            category="Governance",
            description="Risk register lacks owners for high impact items.",
            impact="Medium",
            suggested_action="Assign accountable owners and due dates for each risk and track mitigation.",
            evidence_hints=["Risk register", "Owner assignment"],
        ),
        GapInsight(
            requirement_id="CC6.7",
            category="Change Management",
            description="No documented rollback plans for emergency changes.",
            impact="High",
            suggested_action="Add rollback sections to emergency change templates and capture test evidence.",
            evidence_hints=["Change record", "Rollback test"],
        ),
    ),
})

MAX_UNCOVERED = 5
MAX_PARTIAL = 5
MAX_PRIORITY = 3
MAX_EVIDENCE_HINTS = 3

PRIORITY_RECOMMENDATION = "Document specific control owners, procedures, and evidence."
HEURISTIC_NEXT_STEPS = (
    "Collect evidence (policy link, log export, approval) for each uncovered control.",
    "Assign owners and due dates for remediation.",
    "Store artifacts in a centralized evidence folder.",
)

FAILED_ACTION = "Remediate the failed control and attach updated evidence of the fix."
PENDING_ACTION = "Attach dated evidence showing the control is designed and operating."


def resolve_framework_name(framework: Optional[str]) -> str:
    """Upper-cased label of the requested framework, defaulting to ISO 27001."""
    selected = (framework or "").strip()
    return (selected or DEFAULT_FRAMEWORK).upper()


def lookup_framework_gaps(framework: Optional[str], focus: Optional[str] = None) -> list[GapInsight]:
    """
    Known gaps for a framework, optionally narrowed to a focus.

    Unknown or blank framework names use the ISO 27001 catalog. A focus
    matches category or requirement id by case-insensitive substring; when
    nothing matches, the full catalog is returned so the caller never sees
    an empty (seemingly compliant) gap list.
    """
    key = (framework or "").strip().casefold()
    catalog = GAP_CATALOG.get(key, GAP_CATALOG[DEFAULT_FRAMEWORK.casefold()])

    needle = (focus or "").strip().casefold()
    if not needle:
        return list(catalog)

    filtered = [
        gap for gap in catalog
        if needle in gap.category.casefold() or needle in gap.requirement_id.casefold()
    ]
    return filtered or list(catalog)


def build_checklist_gaps(checklist: ChecklistSnapshot) -> list[GapInsight]:
    """Gap entries for every checklist item that has not passed."""
    gaps = []
    for item in checklist.items:
        if item.status == "passed":
            continue
        failed = item.status == "failed"
        gaps.append(GapInsight(
            requirement_id=str(item.id),
            category=item.category or "Uncategorized",
            description=item.requirement,
            impact="High" if failed else "Medium",
            suggested_action=FAILED_ACTION if failed else PENDING_ACTION,
            evidence_hints=item.hints[:MAX_EVIDENCE_HINTS],
        ))
    return gaps


def _found_in(token: str, evidence: list[str]) -> bool:
    return any(token in snippet for snippet in evidence)


def heuristic_gap_analysis(
    requirements: Iterable[str],
    evidence: Iterable[str]
) -> GapAnalysisAiSummary:
    """
    Classify requirements as uncovered or partially covered by evidence.

    Args:
        requirements: Requirement statements, in priority order
        evidence: Evidence snippets

    Returns:
        GapAnalysisAiSummary tagged as heuristic
    """
    lowered_evidence = [snippet.lower() for snippet in evidence or [] if snippet]
    entries = [
        (requirement, extract_tokens(requirement, distinct=True))
        for requirement in requirements or []
        if requirement is not None
    ]

    uncovered = [
        requirement for requirement, tokens in entries
        if not tokens or not any(_found_in(token, lowered_evidence) for token in tokens)
    ][:MAX_UNCOVERED]

    partial = [
        requirement for requirement, tokens in entries
        if requirement not in uncovered and any(_found_in(token, lowered_evidence) for token in tokens)
    ][:MAX_PARTIAL]

    priority = [
        PriorityGap(requirement=requirement, severity="critical", recommendation=PRIORITY_RECOMMENDATION)
        for requirement in uncovered[:MAX_PRIORITY]
    ]

    return GapAnalysisAiSummary(
        uncovered_requirements=uncovered,
        partial_coverage=partial,
        priority_gaps=priority,
        next_steps=list(HEURISTIC_NEXT_STEPS),
        source="heuristic",
    )
