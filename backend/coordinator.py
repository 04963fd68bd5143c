# backend/coordinator.py
import logging
from typing import List, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from agents.task_agent import TaskExtractionAgent
from agents.task_parser import GeneratedTask
from backend.errors import AppError
from backend.models import Task, TaskPriority, TaskStatus, Transcript

logger = logging.getLogger(__name__)


class TranscriptCoordinator:
    """Runs task extraction for a transcript and stores both in one transaction."""

    def __init__(self, agent: TaskExtractionAgent):
        self.agent = agent

    async def process_transcript(self, db: Session, content: str) -> Tuple[Transcript, List[Task], str]:
        """
        Extract tasks from ``content`` and persist the transcript with its tasks.

        Returns the stored transcript, its tasks in generation order, and the
        task source ("llm" or "fallback").
        """
        generated, source = await self.agent.extract_tasks(content)
        logger.info(f"Generated {len(generated)} action items ({source})")

        # Session I/O is blocking, keep it off the event loop
        transcript, tasks = await run_in_threadpool(self.store_transcript, db, content, generated)
        return transcript, tasks, source

    def store_transcript(self, db: Session, content: str,
                         generated: List[GeneratedTask]) -> Tuple[Transcript, List[Task]]:
        transcript = Transcript(content=content)
        tasks = [
            Task(
                title=item.title,
                description=item.description,
                status=TaskStatus.PENDING,
                priority=TaskPriority(item.priority),
                tags=list(item.tags),
            )
            for item in generated
        ]
        transcript.tasks = tasks

        try:
            db.add(transcript)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error processing transcript: {e}")
            raise AppError("Failed to process transcript and generate action items", 500) from e

        return transcript, tasks
