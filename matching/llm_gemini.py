import json
import logging
import re

import requests
from pydantic import ValidationError

import config
from errors import AnalysisSchemaError, InputValidationError, NetworkError, ResponseFormatError
from matching.prompts import build_prompt
from schemas import AnalysisResult

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL | re.IGNORECASE)


def _endpoint(model: str) -> str:
    return f"{config.GEMINI_API_URL.rstrip('/')}/{model}:generateContent"


def _answer_text(data) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent envelope."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise ResponseFormatError(f"Invalid API response format: {e!r}") from e
    if not isinstance(text, str):
        raise ResponseFormatError("Invalid API response format: answer text is not a string")
    return text


def parse_analysis(raw: str) -> AnalysisResult:
    """Parse the model's answer into an AnalysisResult."""
    m = _FENCE_RE.match(raw)
    if m:
        raw = m.group(1)
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ResponseFormatError(f"Model answer is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise AnalysisSchemaError(f"Expected a JSON object, got {type(parsed).__name__}")
    try:
        return AnalysisResult.model_validate(parsed)
    except ValidationError as e:
        raise AnalysisSchemaError(f"Analysis does not match schema: {e.error_count()} error(s)\n{e}") from e


def analyze_resume(resume_text: str, job_description: str, api_key: str | None = None,
                   session: requests.Session | None = None) -> AnalysisResult:
    """Compare a resume against a job description with Gemini and return the structured analysis."""
    if not resume_text.strip() or not job_description.strip():
        raise InputValidationError("resume_text and job_description must not be empty")

    key = config.check_api_key(api_key) if api_key is not None else config.get_api_key()
    url = _endpoint(config.MODEL_NAME)
    payload = {"contents": [{"parts": [{"text": build_prompt(resume_text, job_description)}]}]}
    post = session.post if session is not None else requests.post

    logger.info(f"Requesting analysis from {config.MODEL_NAME} "
                f"(resume {len(resume_text)} chars, jd {len(job_description)} chars)")
    try:
        response = post(url, params={"key": key}, json=payload,
                        headers={"Content-Type": "application/json"}, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        # the URL in the message carries the key
        status = getattr(e.response, "status_code", None)
        logger.error(f"Gemini API request failed: {type(e).__name__} (status {status})")
        raise NetworkError(f"API request failed: {status or type(e).__name__}") from None

    try:
        try:
            data = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Response body is not JSON: {e}") from e
        result = parse_analysis(_answer_text(data))
    except (ResponseFormatError, AnalysisSchemaError) as e:
        logger.error(f"Gemini API returned an unusable answer: {e}")
        raise

    logger.info(f"Analysis complete: matchScore={result.matchScore}")
    return result
