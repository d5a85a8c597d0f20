"""
Turns the free-text model reply into a well-typed AnalysisResult.

The reply is supposed to hold a JSON object, possibly wrapped in a markdown
code fence, but nothing about it is trusted: unparsable text collapses into
FALLBACK_ANALYSIS and every field is coerced independently.
"""

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from newsverdict.core.models import AnalysisResult

logger = logging.getLogger(__name__)

VERDICTS = ("real", "fake", "uncertain")
DEFAULT_VERDICT = "uncertain"
DEFAULT_CONFIDENCE = 50
DEFAULT_EXPLANATION = "Analysis complete."

FALLBACK_ANALYSIS: Dict[str, Any] = {
    "verdict": "uncertain",
    "confidence": 50,
    "explanation": "Unable to fully analyze this content. Please try again.",
    "redFlags": [],
}

FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


@dataclass(frozen=True)
class ParsedReply:
    data: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UnparsableReply:
    reason: str


ParseOutcome = Union[ParsedReply, UnparsableReply]


def extract_candidate(reply: str) -> str:
    """Inner text of the first fenced block, or the whole reply."""
    match = FENCED_BLOCK.search(reply)
    candidate = match.group(1) if match else reply
    return candidate.strip()


def parse_candidate(candidate: str) -> ParseOutcome:
    try:
        data = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        return UnparsableReply(reason=str(e))

    # Arrays, scalars and null carry no fields; every field takes its default.
    if not isinstance(data, dict):
        return ParsedReply(data={})
    return ParsedReply(data=data)


def coerce_verdict(value: Any) -> str:
    if isinstance(value, str) and value in VERDICTS:
        return value
    return DEFAULT_VERDICT


def coerce_confidence(value: Any) -> int:
    """
    Rounds half up and clamps into [0, 100].

    Only real numbers count; bools, numeric strings and non-finite floats
    fall back to DEFAULT_CONFIDENCE.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    if isinstance(value, float) and not math.isfinite(value):
        return DEFAULT_CONFIDENCE
    # Ints are never converted to float; huge JSON integers would overflow.
    rounded = value if isinstance(value, int) else math.floor(value + 0.5)
    return min(100, max(0, rounded))


def coerce_explanation(value: Any) -> str:
    if isinstance(value, str):
        return value
    return DEFAULT_EXPLANATION


def coerce_red_flags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [flag for flag in value if isinstance(flag, str)]


def sanitize(data: Dict[str, Any]) -> AnalysisResult:
    """Composes the field coercers into one schema-valid result."""
    return AnalysisResult(
        verdict=coerce_verdict(data.get("verdict")),
        confidence=coerce_confidence(data.get("confidence")),
        explanation=coerce_explanation(data.get("explanation")),
        red_flags=coerce_red_flags(data.get("redFlags")),
    )


def sanitize_reply(reply: str) -> AnalysisResult:
    """
    Extracts, parses and sanitizes a raw model reply.

    Never raises for malformed content: an unparsable candidate is logged and
    replaced by FALLBACK_ANALYSIS before sanitization.

    Args:
        reply (str): Raw message text returned by the model.

    Returns:
        AnalysisResult: The normalized verdict.
    """
    outcome = parse_candidate(extract_candidate(reply))

    if isinstance(outcome, UnparsableReply):
        logger.error(f"Failed to parse AI response as JSON: {outcome.reason} | {reply}")
        data = FALLBACK_ANALYSIS
    else:
        data = outcome.data

    return sanitize(data)
