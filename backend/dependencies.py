# backend/dependencies.py
import uuid

from fastapi import Depends, Path
from fastapi.exceptions import RequestValidationError

from agents.task_agent import TaskExtractionAgent
from backend.coordinator import TranscriptCoordinator

# Shared across requests; the LLM client is created on first use
task_agent = TaskExtractionAgent()


def get_task_agent() -> TaskExtractionAgent:
    return task_agent


def get_coordinator(agent: TaskExtractionAgent = Depends(get_task_agent)) -> TranscriptCoordinator:
    return TranscriptCoordinator(agent)


def _require_uuid(value: str, message: str) -> str:
    try:
        uuid.UUID(value)
    except ValueError:
        raise RequestValidationError([
            {"loc": ("path", "id"), "msg": message, "type": "uuid_parsing", "input": value}
        ])
    return value


def valid_task_id(id: str = Path(...)) -> str:
    return _require_uuid(id, "Invalid task ID format")


def valid_transcript_id(id: str = Path(...)) -> str:
    return _require_uuid(id, "Invalid transcript ID format")
