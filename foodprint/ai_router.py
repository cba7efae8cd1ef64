# foodprint/ai_router.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import openai
from openai import OpenAI

from .config import Settings, get_settings
from .parsers import InvalidResultError, ResultParseError, parse_model_json, validate_result
from .prompts import build_messages
from .schemas import AnalysisType

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Failure that the HTTP layer turns into {"error": message} with `status`."""

    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.message = message
        self.status = status


# provider status -> what the user sees
PROVIDER_ERRORS = {
    429: "Rate limit exceeded. Please try again in a moment.",
    402: "AI credits exhausted. Please add credits to continue.",
}


def _client(settings: Settings) -> OpenAI:
    if not settings.api_key:
        raise AnalysisError("API key not configured", status=500)
    return OpenAI(
        api_key=settings.api_key,
        base_url=settings.gateway_url,
        timeout=settings.timeout,
        max_retries=0,
    )


def _complete(client: OpenAI, model: str, messages: list) -> Optional[str]:
    try:
        rsp = client.chat.completions.create(model=model, messages=messages)
    except openai.APIStatusError as e:
        logger.error("[ai] gateway error: %s %s", e.status_code, e.message)
        msg = PROVIDER_ERRORS.get(e.status_code)
        if msg:
            raise AnalysisError(msg, status=e.status_code) from e
        raise AnalysisError("Failed to analyze image", status=500) from e
    except openai.OpenAIError as e:
        logger.error("[ai] gateway unreachable: %r", e)
        raise AnalysisError("Failed to analyze image", status=500) from e

    if not rsp.choices:
        return None
    return rsp.choices[0].message.content


def analyze_image(
    image_url: str,
    analysis_type: AnalysisType = AnalysisType.FOOD,
    meal_context: Optional[Dict[str, Any]] = None,
    settings: Optional[Settings] = None,
    client: Optional[OpenAI] = None,
) -> Dict[str, Any]:
    """
    Send one image to the model and return its validated JSON reply.

    The dict is passed through as the model wrote it (extra keys kept); only
    the required keys for `analysis_type` are checked.
    """
    settings = settings or get_settings()
    client = client or _client(settings)
    kind = analysis_type.value

    logger.info("[ai] analyzing %s image with %s", kind, settings.model)
    messages = build_messages(image_url, analysis_type, meal_context)
    content = _complete(client, settings.model, messages)
    logger.info("[ai] response: %s", content)

    if not content:
        raise AnalysisError("No response from AI", status=500)

    try:
        result = parse_model_json(content)
    except ResultParseError as e:
        logger.error("[ai] failed to parse %s reply: %s", kind, e)
        raise AnalysisError(f"Failed to parse {kind} analysis", status=500) from e

    try:
        validate_result(result, analysis_type)
    except InvalidResultError as e:
        logger.error("[ai] invalid %s response structure (%s): %s", kind, e, result)
        raise AnalysisError(f"Invalid {kind} analysis response", status=500) from e

    if analysis_type is AnalysisType.FOOD:
        logger.info("[ai] successfully analyzed food: %s", result.get("name"))
    else:
        logger.info("[ai] successfully analyzed waste: %s%% wasted", result.get("wastePercentage"))
    return result
