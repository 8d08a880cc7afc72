"""
Breakdown Routes
Endpoint that turns a project description into a list of suggested tasks
"""
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import logging

from vibesana.breakdown_service import DESCRIPTION_REQUIRED_MESSAGE
from vibesana.exceptions import ValidationError
from ..models.breakdown import TaskBreakdownRequest, TaskBreakdownResponse, ErrorResponse
from ..dependencies import get_breakdown_service

router = APIRouter()
logger = logging.getLogger(__name__)


async def read_breakdown_request(request: Request) -> TaskBreakdownRequest:
    """Parse the request body, mapping anything unusable to a ValidationError"""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError("Invalid JSON body")

    if not isinstance(payload, dict):
        raise ValidationError(DESCRIPTION_REQUIRED_MESSAGE)

    try:
        return TaskBreakdownRequest.parse_obj(payload)
    except PydanticValidationError:
        raise ValidationError(DESCRIPTION_REQUIRED_MESSAGE)


@router.post("/ai-task-breakdown",
          response_model=TaskBreakdownResponse,
          responses={500: {"model": ErrorResponse, "description": "Validation, provider or internal error"}},
          tags=["Breakdown"],
          summary="Break a project description into tasks",
          description="Ask the language model to decompose a free-text project description into 5-10 actionable tasks. "
                      "Malformed model output degrades to a fixed two-task fallback list.",
          openapi_extra={
              "requestBody": {
                  "required": True,
                  "content": {"application/json": {"schema": TaskBreakdownRequest.schema()}}
              }
          })
async def ai_task_breakdown(request: Request, response: Response):
    """Break a project description down into tasks"""
    try:
        service = get_breakdown_service()
        body = await read_breakdown_request(request)

        result = await service.breakdown(body.description)

        response.headers["X-Request-Id"] = result.request_id
        return TaskBreakdownResponse(tasks=result.tasks)

    except Exception as e:
        logger.error(f"Error in ai-task-breakdown function: {e}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=str(e)).dict()
        )
