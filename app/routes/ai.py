# app/routes/ai.py

"""
AI Routes.

Admin-only writing helpers backed by the inference client: excerpt
generation, tag suggestion and content analysis. Without a configured
``GEMINI_API_KEY`` every endpoint answers 503; an unreachable upstream is
also 503 and any other model failure is reported as a generic 500.
"""

from logging import getLogger
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import ORJSONResponse

from app.auth import AdminDep
from app.configs import file_logger
from app.dependencies import ContentAssistantDep, rate_limit
from app.errors import AiError, AiNetworkError, OperationFailedError
from app.schemas import ContentRequest, TagsRequest, envelope

logger = file_logger(getLogger(__name__))

router = APIRouter(
    prefix="/api/ai",
    tags=["🤖 AI"],
    dependencies=[Depends(rate_limit("ai"))],
)

AI_RESPONSES: dict[int | str, dict[str, Any]] = {
    503: {
        "description": "AI service unavailable",
        "content": {
            "application/json": {"example": {"success": False, "error": "AI service is not configured"}},
        },
    },
}


@router.post(
    "/generate-excerpt",
    response_class=ORJSONResponse,
    summary="Generate an excerpt",
    description="Content is script-stripped and truncated to 2000 characters before prompting.",
    responses=AI_RESPONSES,
    operation_id="ai_generate_excerpt",
)
async def generate_excerpt(
    _admin: AdminDep,
    body: Annotated[ContentRequest, Body()],
    assistant: ContentAssistantDep,
) -> dict[str, Any]:
    try:
        excerpt = await assistant.generate_excerpt(body.content or "")
    except AiNetworkError:
        raise
    except AiError as e:
        logger.exception("Excerpt generation failed")
        mssg = "Failed to generate excerpt"
        raise OperationFailedError(mssg) from e
    return envelope(data=excerpt, message="Excerpt generated successfully")


@router.post(
    "/generate-tags",
    response_class=ORJSONResponse,
    summary="Suggest tags",
    description="Returns at most five lower-cased tags.",
    responses=AI_RESPONSES,
    operation_id="ai_generate_tags",
)
async def generate_tags(
    _admin: AdminDep,
    body: Annotated[TagsRequest, Body()],
    assistant: ContentAssistantDep,
) -> dict[str, Any]:
    try:
        tags = await assistant.generate_tags(body.title, body.content)
    except AiNetworkError:
        raise
    except AiError as e:
        logger.exception("Tag generation failed")
        mssg = "Failed to generate tags"
        raise OperationFailedError(mssg) from e
    return envelope(data=tags, message="Tags generated successfully")


@router.post(
    "/content-analysis",
    response_class=ORJSONResponse,
    summary="Analyze content",
    description="Model feedback plus locally computed word, sentence and reading-time metrics.",
    responses=AI_RESPONSES,
    operation_id="ai_content_analysis",
)
async def analyze_content(
    _admin: AdminDep,
    body: Annotated[ContentRequest, Body()],
    assistant: ContentAssistantDep,
) -> dict[str, Any]:
    try:
        analysis = await assistant.analyze(body.content or "")
    except AiNetworkError:
        raise
    except AiError as e:
        logger.exception("Content analysis failed")
        mssg = "Failed to analyze content"
        raise OperationFailedError(mssg) from e
    return envelope(data=analysis, message="Content analysis completed")
