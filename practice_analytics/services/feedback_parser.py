"""
Feedback payload parsing.

Report payloads arrive either as a structured object or as its JSON text, with
strengths/weaknesses at the top level or nested under ``feedback``. Everything
is normalised to a ``FeedbackSummary`` here so aggregation never branches on
payload shape.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from practice_analytics.exceptions import MalformedFeedbackError


@dataclass(frozen=True)
class TextFeedback:
    """Payload stored as JSON text."""
    text: str


@dataclass(frozen=True)
class StructuredFeedback:
    """Payload stored as an object, with an optional nested ``feedback`` section."""
    nested: Optional[Mapping[str, Any]]
    flat: Mapping[str, Any]


RawFeedback = Union[TextFeedback, StructuredFeedback]


@dataclass(frozen=True)
class FeedbackSummary:
    strengths: List[str] = field(default_factory=list)
    weaknesses: List[str] = field(default_factory=list)


EMPTY_FEEDBACK = FeedbackSummary()


def classify_payload(payload: Any) -> Optional[RawFeedback]:
    """Tag a raw payload. ``None`` means there is no feedback at all."""
    if payload is None:
        return None
    if isinstance(payload, str):
        return TextFeedback(payload)
    if isinstance(payload, Mapping):
        nested = payload.get("feedback")
        return StructuredFeedback(
            nested=nested if isinstance(nested, Mapping) else None,
            flat=payload
        )
    raise MalformedFeedbackError(
        f"Unsupported feedback payload type: {type(payload).__name__}",
        context={"type": type(payload).__name__}
    )


def _string_list(section: Mapping[str, Any], key: str) -> List[str]:
    values = section.get(key)
    if values is None:
        return []
    if not isinstance(values, list):
        raise MalformedFeedbackError(f"'{key}' must be a list", context={"key": key})
    for value in values:
        if not isinstance(value, str):
            raise MalformedFeedbackError(f"'{key}' must contain only strings", context={"key": key})
    return list(values)


def _summarize(raw: RawFeedback) -> FeedbackSummary:
    if isinstance(raw, TextFeedback):
        try:
            decoded = json.loads(raw.text)
        except (TypeError, ValueError, RecursionError) as e:
            raise MalformedFeedbackError(f"Feedback text is not valid JSON: {e}") from e
        if not isinstance(decoded, dict):
            raise MalformedFeedbackError("Feedback text does not encode an object")
        raw = classify_payload(decoded)
    
    section = raw.nested if raw.nested is not None else raw.flat
    return FeedbackSummary(
        strengths=_string_list(section, "strengths"),
        weaknesses=_string_list(section, "weaknesses")
    )


def parse_feedback_payload(payload: Union[Dict[str, Any], str, None]) -> FeedbackSummary:
    """
    Normalise a report payload to its strengths and weaknesses.
    
    Raises:
        MalformedFeedbackError: if the payload cannot be read as a feedback object
    """
    raw = classify_payload(payload)
    if raw is None:
        return EMPTY_FEEDBACK
    return _summarize(raw)
