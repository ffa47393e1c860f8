"""
Unit tests for feedback payload parsing.
"""
import json
import pytest
from practice_analytics.exceptions import MalformedFeedbackError
from practice_analytics.services.feedback_parser import (
    EMPTY_FEEDBACK, FeedbackSummary, StructuredFeedback, TextFeedback,
    classify_payload, parse_feedback_payload
)


class TestClassifyPayload:

    @pytest.mark.unit
    def test_none_has_no_feedback(self):
        assert classify_payload(None) is None

    @pytest.mark.unit
    def test_text_payload(self):
        assert classify_payload('{"strengths": []}') == TextFeedback('{"strengths": []}')

    @pytest.mark.unit
    def test_structured_with_nested_section(self):
        payload = {"feedback": {"strengths": ["A"]}, "score": 80}
        raw = classify_payload(payload)
        assert isinstance(raw, StructuredFeedback)
        assert raw.nested == {"strengths": ["A"]}

    @pytest.mark.unit
    def test_summary_string_under_feedback_is_not_a_section(self):
        raw = classify_payload({"feedback": "Good job overall", "strengths": ["A"]})
        assert raw.nested is None

    @pytest.mark.unit
    def test_unsupported_type(self):
        with pytest.raises(MalformedFeedbackError):
            classify_payload(42)


class TestParseFeedbackPayload:

    @pytest.mark.unit
    def test_report_generator_output(self, sample_report):
        summary = parse_feedback_payload(sample_report)
        assert summary.strengths == ["Clear communication", "Good use of examples"]
        assert summary.weaknesses == ["Answers lacked measurable outcomes"]

    @pytest.mark.unit
    def test_report_as_json_text(self, sample_report):
        summary = parse_feedback_payload(json.dumps(sample_report))
        assert summary.strengths == sample_report["strengths"]

    @pytest.mark.unit
    def test_nested_section_preferred(self):
        payload = {
            "feedback": {"strengths": ["Nested"], "weaknesses": ["Nested weakness"]},
            "strengths": ["Flat"],
        }
        assert parse_feedback_payload(payload) == FeedbackSummary(
            strengths=["Nested"], weaknesses=["Nested weakness"]
        )

    @pytest.mark.unit
    def test_nested_inside_text(self):
        text = json.dumps({"feedback": {"weaknesses": ["Rambling"]}})
        summary = parse_feedback_payload(text)
        assert summary.strengths == []
        assert summary.weaknesses == ["Rambling"]

    @pytest.mark.unit
    def test_missing_lists_are_empty(self):
        assert parse_feedback_payload({"score": 50}) == EMPTY_FEEDBACK
        assert parse_feedback_payload({"strengths": None}) == EMPTY_FEEDBACK

    @pytest.mark.unit
    def test_none_payload(self):
        assert parse_feedback_payload(None) == EMPTY_FEEDBACK

    @pytest.mark.unit
    @pytest.mark.parametrize("payload", [
        "",
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        {"strengths": "Clear"},
        {"weaknesses": ["Fine", 3]},
        "[" * 100000,
        {"feedback": {"strengths": {"a": 1}}},
    ])
    def test_malformed_payloads(self, payload):
        with pytest.raises(MalformedFeedbackError):
            parse_feedback_payload(payload)
