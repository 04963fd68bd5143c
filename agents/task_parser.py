# agents/task_parser.py
"""Pull a JSON task list out of free-form model output and clip it into shape."""
import json
import logging
import re
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

PRIORITIES = ("LOW", "MEDIUM", "HIGH", "URGENT")
DEFAULT_PRIORITY = "MEDIUM"

MAX_TASKS = 10
MAX_TITLE_LENGTH = 60
MAX_DESCRIPTION_LENGTH = 500
MAX_TAGS = 3

# Tried in order, first match wins
_OBJECT_ARRAY = re.compile(r"\[\s*{[\s\S]*}\s*\]")
_CODE_BLOCK_ARRAY = re.compile(r"```(?:json)?\s*(\[[\s\S]*?\])\s*```")
_ANY_ARRAY = re.compile(r"\[[\s\S]*?\]")


class TaskParseError(ValueError):
    """The model reply did not contain a usable JSON task array."""


class GeneratedTask(BaseModel):
    title: str
    description: str
    priority: Literal["LOW", "MEDIUM", "HIGH", "URGENT"] = DEFAULT_PRIORITY
    tags: List[str] = Field(default_factory=list)


def extract_json_array(text: str) -> Optional[str]:
    """Return the first JSON-array-looking span of ``text``, or None."""
    match = _OBJECT_ARRAY.search(text)
    if match:
        return match.group(0)

    match = _CODE_BLOCK_ARRAY.search(text)
    if match:
        logger.debug("Found JSON in code block")
        return match.group(1)

    match = _ANY_ARRAY.search(text)
    if match:
        logger.debug("Found array-like structure")
        return match.group(0)

    return None


def parse_tasks(text: str) -> List[GeneratedTask]:
    """Decode and sanitize the task list in a model reply.

    Raises:
        TaskParseError: no array was found, or it is not valid JSON.
    """
    candidate = extract_json_array(text or "")
    if candidate is None:
        preview = (text or "")[:500]
        raise TaskParseError(f"No valid JSON found in LLM response: {preview!r}")

    try:
        decoded = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise TaskParseError(f"JSON parsing failed: {e}") from e

    if not isinstance(decoded, list):
        raise TaskParseError("LLM response is not a JSON array")

    tasks = sanitize_tasks(decoded)
    logger.info(f"Parsed {len(decoded)} raw tasks, kept {len(tasks)}")
    return tasks


def sanitize_tasks(items: Any) -> List[GeneratedTask]:
    if not isinstance(items, list):
        return []

    tasks = []
    for item in items:
        if not isinstance(item, dict):
            continue
        title = _clip(item.get("title"), MAX_TITLE_LENGTH)
        description = _clip(item.get("description"), MAX_DESCRIPTION_LENGTH)
        if not title or not description:
            continue
        tasks.append(GeneratedTask(
            title=title,
            description=description,
            priority=normalize_priority(item.get("priority")),
            tags=normalize_tags(item.get("tags")),
        ))
        if len(tasks) == MAX_TASKS:
            break
    return tasks


def normalize_priority(priority: Any) -> str:
    if isinstance(priority, str) and priority.strip().upper() in PRIORITIES:
        return priority.strip().upper()
    return DEFAULT_PRIORITY


def normalize_tags(tags: Any) -> List[str]:
    if not isinstance(tags, list):
        return []
    cleaned = [tag.strip().lower() for tag in tags if isinstance(tag, str) and tag.strip()]
    return cleaned[:MAX_TAGS]


def _clip(value: Any, limit: int) -> str:
    if value is None or value == "":
        return ""
    return str(value).strip()[:limit]
