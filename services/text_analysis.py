"""
Text Analysis Service

Sentence segmentation, keyword ranking and focus-area coverage scoring.

Every function here is total: empty or whitespace input produces an empty
result rather than an error.
"""

import re
from collections import Counter
from typing import Iterable, Optional

SENTENCE_SPLITTER = re.compile(r"(?<=[.!?])\s+")
WORD_MATCHER = re.compile(r"[A-Za-z]{4,}")

GENERAL_COVERAGE_KEY = "general"
GENERAL_COVERAGE_LENGTH = 4000


def split_sentences(text: Optional[str]) -> list[str]:
    """Split text after '.', '!' or '?' followed by whitespace, dropping empty fragments."""
    if not text or not text.strip():
        return []
    return [sentence.strip() for sentence in SENTENCE_SPLITTER.split(text) if sentence.strip()]


def extract_tokens(text: Optional[str], distinct: bool = False) -> list[str]:
    """
    Extract lower-cased runs of four or more ASCII letters.

    Args:
        text: Source text
        distinct: Drop repeated tokens, keeping first-seen order

    Returns:
        List of tokens
    """
    if not text:
        return []

    tokens = [match.group(0).lower() for match in WORD_MATCHER.finditer(text)]
    if distinct:
        return list(dict.fromkeys(tokens))
    return tokens


def rank_keywords(text: Optional[str], limit: int = 6) -> list[str]:
    """Most frequent tokens, ties broken alphabetically, title-cased for display."""
    frequency = Counter(extract_tokens(text))
    ranked = sorted(frequency.items(), key=lambda entry: (-entry[1], entry[0]))
    return [token.title() for token, _ in ranked[:limit]]


def _general_coverage(document: str) -> float:
    return round(min(1.0, len(document) / GENERAL_COVERAGE_LENGTH), 2)


def score_coverage(document: Optional[str], focus_areas: Optional[Iterable[str]]) -> dict[str, float]:
    """
    Score how much of each focus area's vocabulary appears in the document.

    A focus area's score is the share of its distinct tokens found as a
    substring of the lower-cased document. Areas without tokens are skipped,
    as are repeats of an area differing only in case; the first spelling wins.
    When nothing is left to score, a single "general" entry approximates
    coverage from document length.

    Args:
        document: Document text
        focus_areas: Focus-area phrases

    Returns:
        Mapping of focus area to a score in [0, 1], rounded to 2 decimals
    """
    document = document or ""
    normalized_document = document.lower()
    coverage: dict[str, float] = {}
    seen: set[str] = set()

    for area in focus_areas or []:
        if not area or not area.strip():
            continue

        name = area.strip()
        if name.casefold() in seen:
            continue

        tokens = extract_tokens(area, distinct=True)
        if not tokens:
            continue

        hits = sum(1 for token in tokens if token in normalized_document)
        score = min(1.0, max(0.0, hits / len(tokens)))
        coverage[name] = round(score, 2)
        seen.add(name.casefold())

    if not coverage:
        coverage[GENERAL_COVERAGE_KEY] = _general_coverage(normalized_document)

    return coverage


def extract_relevant_sections(
    document_text: Optional[str],
    tokens: Iterable[str],
    max_sections: int = 3
) -> list[str]:
    """
    Collect sentences that mention any of the given tokens.

    Tokens are trimmed, lower-cased and de-duplicated; matching is a
    case-insensitive substring test. Sentences are returned verbatim in
    document order, at most ``max_sections`` of them.
    """
    if not document_text or not document_text.strip():
        return []

    normalized_tokens = list(dict.fromkeys(
        token.strip().lower() for token in tokens or [] if token and token.strip()
    ))
    if not normalized_tokens:
        return []

    relevant = []
    for sentence in split_sentences(document_text):
        if len(relevant) >= max_sections:
            break
        lower_sentence = sentence.lower()
        if any(token in lower_sentence for token in normalized_tokens):
            relevant.append(sentence)

    return relevant
