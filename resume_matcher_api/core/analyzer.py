"""Resume vs. job description analysis using Google Gemini."""

import json
import logging
import time

import google.generativeai as genai
from pydantic import ValidationError

from ..models import AnalysisResult, ModelInfo

logger = logging.getLogger(__name__)

AVAILABLE_MODELS = [
    ModelInfo(
        id="gemini-1.5-flash",
        name="Gemini 1.5 Flash",
        description="Fast and efficient, good for quick analyses",
    ),
    ModelInfo(
        id="gemini-1.5-pro",
        name="Gemini 1.5 Pro",
        description="More thorough analysis with deeper insights",
    ),
    ModelInfo(
        id="gemini-2.0-flash-exp",
        name="Gemini 2.0 Flash (Experimental)",
        description="Latest model with improved reasoning",
    ),
]

FALLBACK_RESULT = AnalysisResult(
    match_percentage=0,
    overall_assessment="Unable to analyze resume. Please try again.",
    weaknesses=["Analysis could not be completed"],
    recommendations=["Please try again with a clearer resume format"],
    bottlenecks=["Technical error during analysis"],
)


class AnalysisError(Exception):
    """Raised when the AI model call itself fails."""

    pass


def is_supported_model(model: str) -> bool:
    return any(info.id == model for info in AVAILABLE_MODELS)


def parse_analysis_response(text: str) -> AnalysisResult:
    """Parse the model's JSON answer, tolerating markdown code fences.

    Unparsable output yields FALLBACK_RESULT rather than an error.
    """
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    elif cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    cleaned = cleaned.strip()

    try:
        return AnalysisResult.model_validate(json.loads(cleaned))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to parse model response: {e}")
        logger.debug(f"Raw response: {text}")
        return FALLBACK_RESULT.model_copy(deep=True)


class ResumeAnalyzer:
    """Gemini client that scores a resume against a job description."""

    ANALYSIS_PROMPT = """You are an expert resume analyst and career coach. Analyze the provided resume against the job description and provide a comprehensive analysis.

RESUME:
{resume}

JOB DESCRIPTION:
{job_description}

Provide your analysis in the following JSON format ONLY (no markdown, no code blocks, just pure JSON):
{
  "match_percentage": <integer between 0-100>,
  "overall_assessment": "<2-3 sentence comprehensive assessment>",
  "strengths": ["<strength 1>", "<strength 2>", ...],
  "weaknesses": ["<weakness 1>", "<weakness 2>", ...],
  "missing_keywords": ["<keyword 1>", "<keyword 2>", ...],
  "missing_skills": ["<skill 1>", "<skill 2>", ...],
  "bullet_point_improvements": [
    {
      "original": "<original bullet point from resume>",
      "improved": "<improved version>",
      "reason": "<why this improvement helps>"
    }
  ],
  "recommendations": ["<actionable recommendation 1>", ...],
  "resources": [
    {
      "title": "<resource name>",
      "type": "<course/book/certification/tool>",
      "description": "<brief description of how it helps>"
    }
  ],
  "bottlenecks": ["<critical issue 1>", ...],
  "ats_score": <integer between 0-100 representing ATS compatibility>,
  "format_suggestions": ["<format improvement 1>", ...]
}

Be specific, actionable, and constructive. Focus on how the candidate can improve their resume to better match this specific job."""

    def __init__(self, api_key: str | None = None):
        """Initialize Gemini client."""
        genai.configure(api_key=api_key)

    async def analyze(self, resume_text: str, job_description: str, model: str) -> AnalysisResult:
        """Run one analysis.

        Raises:
            AnalysisError: If the Gemini call fails
        """
        prompt = self.ANALYSIS_PROMPT.replace("{resume}", resume_text).replace(
            "{job_description}", job_description
        )
        start_time = time.time()

        try:
            response = await genai.GenerativeModel(model).generate_content_async(prompt)
            text = response.text or ""
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise AnalysisError(f"Failed to generate analysis: {e}") from e

        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Gemini analysis completed with {model} in {latency_ms}ms")
        return parse_analysis_response(text)
