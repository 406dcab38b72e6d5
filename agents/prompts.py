"""
Prompt Templates

System instructions and user-prompt builders for the model-backed analyzers.
"""

import json
from typing import Optional

from schemas.analysis import AnalyzeMatchRequest
from schemas.checklist import ChecklistProgress, ChecklistSnapshot
from schemas.report import ReportSuggestionRequest


MATCH_SYSTEM_PROMPT = """You are an expert compliance auditor. Given a regulatory requirement, document text, and optional hints, determine if the document satisfies the requirement.
- Respond ONLY in strict JSON following this schema:
    {
        "matches": boolean,
        "confidence": number between 0 and 1,
        "relevant_sections": string[],
        "reasoning": string,
        "missing_elements": string[],
        "improvement_suggestion": string | null,
        "recommended_text": string | null
    }
- Cite concrete evidence from the document in reasoning and populate at least one relevant section when possible.
- If evidence is missing, set matches to false, explain why, list the missing elements, and provide BOTH improvement_suggestion (short advice) and recommended_text (copy-ready snippet the user can add to their document).
- Base every statement on the provided document; do not invent facts."""

GAP_SYSTEM_PROMPT = """You are an ISO 27001 compliance expert. Compare the list of required controls with provided evidence snippets.
Return JSON with this schema:
{
    "uncovered_requirements": string[],
    "partial_coverage": string[],
    "priority_gaps": [
        {"requirement": string, "severity": "critical" | "high" | "medium", "recommendation": string}
    ],
    "next_steps": string[]
}
Focus on clarity and keep arrays short (max 5 items each)."""

SUGGESTION_SYSTEM_PROMPT = """You are an AI compliance coach. Based on checklist progress, focus areas, and highlighted evidence, craft actionable improvement suggestions.
Return JSON with this schema:
{
    "executive_summary": string,
    "quick_wins": string[],
    "remediation_plan": string[],
    "template_recommendations": string[],
    "best_practices": string[]
}
Use concise bullet-style statements."""


def build_match_prompt(request: AnalyzeMatchRequest) -> str:
    """User prompt embedding the requirement, document and reviewer hints."""
    hints = [hint.strip() for hint in request.hints if hint and hint.strip()]
    hints_section = "- " + "\n- ".join(hints) if hints else "(no hints provided)"

    return f"""Requirement under review:
{request.requirement}

Document excerpt to analyze:
{request.document_text}

Optional hints from reviewer:
{hints_section}

Task: Explain whether the document satisfies the requirement, reference specific evidence, list missing elements if not fully compliant, and respond using the JSON schema provided by the system instructions.
"""


def build_gap_prompt(requirements: list[str], evidence: list[str]) -> str:
    return f"""REQUIREMENTS:
{json.dumps(requirements)}

EVIDENCE PROVIDED:
{json.dumps(evidence)}

Compare the two lists, identify uncovered controls, partial coverage, priority gaps (critical vs nice-to-have), and next steps.
"""


def build_suggestion_prompt(
    request: ReportSuggestionRequest,
    checklist: ChecklistSnapshot,
    progress: Optional[ChecklistProgress]
) -> str:
    focus = ", ".join(request.focus_areas) if request.focus_areas else "general ISO 27001 maturity"
    highlights = (
        ", ".join(request.evidence_highlights)
        if request.evidence_highlights else "no notable evidence provided"
    )
    completion = progress.completion_percentage if progress else 0.0
    tone = request.audience or request.tone or "executive summary"

    return f"""CHECKLIST NAME: {checklist.name}
TOTAL ITEMS: {len(checklist.items)}
PROGRESS: {completion:.1f}% complete
FOCUS AREAS: {focus}
EVIDENCE HIGHLIGHTS: {highlights}
AUDIENCE TONE: {tone}

Craft compliance improvement suggestions referencing the schema defined in the system prompt.
"""
