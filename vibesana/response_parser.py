"""
Response Parser
Turns raw assistant text into validated tasks, degrading to a fixed fallback list
whenever the text cannot be used.
"""
import json
import logging
from typing import List

from pydantic import ValidationError as PydanticValidationError

from .models import Task, TaskPriority, ParseResult, ParseStatus, INITIAL_TASK_STATUS

logger = logging.getLogger(__name__)

FALLBACK_TASKS = (
    {
        "title": "Review and plan project requirements",
        "description": "Analyze the project description and create a detailed plan",
        "priority": TaskPriority.HIGH.value,
        "status": INITIAL_TASK_STATUS,
    },
    {
        "title": "Set up development environment",
        "description": "Configure tools, frameworks, and dependencies needed",
        "priority": TaskPriority.HIGH.value,
        "status": INITIAL_TASK_STATUS,
    },
)


def get_fallback_tasks() -> List[Task]:
    """Fresh copies of the fallback task list"""
    return [Task(**task) for task in FALLBACK_TASKS]


def _fallback(reason: str) -> ParseResult:
    logger.warning(f"Using fallback task list (reason: {reason})")
    return ParseResult(status=ParseStatus.FALLBACK, tasks=get_fallback_tasks(), reason=reason)


def parse_tasks(raw_text: str) -> ParseResult:
    """
    Parse the assistant output as a JSON array of tasks.

    Never raises: malformed JSON, a non-array value, an empty array or any item
    that does not match the Task schema all yield the fallback list.

    Args:
        raw_text: Assistant message content

    Returns:
        ParseResult tagged PARSED or FALLBACK, always with at least one task
    """
    try:
        # JSONDecodeError is a ValueError; oversized integers and deep nesting raise too
        data = json.loads(raw_text)
    except (ValueError, RecursionError, TypeError) as e:
        logger.error(f"Failed to parse AI response: {e}")
        return _fallback("invalid_json")

    if not isinstance(data, list):
        logger.error(f"AI response is valid JSON but not an array (got {type(data).__name__})")
        return _fallback("not_a_list")

    if not data:
        return _fallback("empty_list")

    tasks = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            logger.error(f"Task #{index} is not an object: {item!r}")
            return _fallback("schema_mismatch")
        try:
            tasks.append(Task(**item))
        except PydanticValidationError as e:
            logger.error(f"Task #{index} does not match the task schema: {e}")
            return _fallback("schema_mismatch")

    logger.info(f"Parsed {len(tasks)} tasks from AI response")
    return ParseResult(status=ParseStatus.PARSED, tasks=tasks)
