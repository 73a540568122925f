"""Tests for parsing Gemini output and the analyzer wrapper."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from resume_matcher_api.core import AnalysisError, ResumeAnalyzer
from resume_matcher_api.core.analyzer import (
    FALLBACK_RESULT,
    is_supported_model,
    parse_analysis_response,
)

VALID_RESULT = {
    "match_percentage": 71,
    "overall_assessment": "Good fit.",
    "strengths": ["Python"],
    "bullet_point_improvements": [
        {"original": "Wrote code", "improved": "Shipped a billing API", "reason": "Concrete"}
    ],
    "resources": [{"title": "CKA", "type": "certification", "description": "Kubernetes"}],
    "ats_score": 64,
}


class TestParseAnalysisResponse:
    def test_plain_json(self):
        result = parse_analysis_response(json.dumps(VALID_RESULT))

        assert result.match_percentage == 71
        assert result.bullet_point_improvements[0].improved == "Shipped a billing API"
        assert result.resources[0].title == "CKA"
        assert result.missing_keywords == []

    @pytest.mark.parametrize("fence", ["```json", "```"])
    def test_code_fences_stripped(self, fence):
        text = f"{fence}\n{json.dumps(VALID_RESULT)}\n```"

        assert parse_analysis_response(text).ats_score == 64

    def test_invalid_json_falls_back(self):
        result = parse_analysis_response("Sorry, I cannot help with that.")

        assert result == FALLBACK_RESULT
        assert result is not FALLBACK_RESULT

    def test_out_of_range_score_falls_back(self):
        result = parse_analysis_response(json.dumps({**VALID_RESULT, "match_percentage": 140}))

        assert result.match_percentage == 0
        assert result.overall_assessment == FALLBACK_RESULT.overall_assessment


@pytest.mark.parametrize(
    "model,supported",
    [
        ("gemini-1.5-flash", True),
        ("gemini-1.5-pro", True),
        ("gemini-2.0-flash-exp", True),
        ("gpt-4", False),
        ("", False),
    ],
)
def test_is_supported_model(model, supported):
    assert is_supported_model(model) is supported


@pytest.mark.asyncio
async def test_analyze_calls_selected_model():
    response = MagicMock()
    response.text = json.dumps(VALID_RESULT)
    gemini_model = MagicMock()
    gemini_model.generate_content_async = AsyncMock(return_value=response)

    with (
        patch("resume_matcher_api.core.analyzer.genai.configure"),
        patch(
            "resume_matcher_api.core.analyzer.genai.GenerativeModel", return_value=gemini_model
        ) as model_cls,
    ):
        analyzer = ResumeAnalyzer(api_key="test-key")
        result = await analyzer.analyze("my resume", "the job", "gemini-1.5-pro")

    model_cls.assert_called_once_with("gemini-1.5-pro")
    prompt = gemini_model.generate_content_async.await_args.args[0]
    assert "my resume" in prompt
    assert "the job" in prompt
    assert result.match_percentage == 71


@pytest.mark.asyncio
async def test_analyze_wraps_api_errors():
    gemini_model = MagicMock()
    gemini_model.generate_content_async = AsyncMock(side_effect=RuntimeError("quota"))

    with (
        patch("resume_matcher_api.core.analyzer.genai.configure"),
        patch("resume_matcher_api.core.analyzer.genai.GenerativeModel", return_value=gemini_model),
    ):
        analyzer = ResumeAnalyzer(api_key="test-key")
        with pytest.raises(AnalysisError):
            await analyzer.analyze("my resume", "the job", "gemini-1.5-flash")
