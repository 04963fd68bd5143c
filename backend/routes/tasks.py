# backend/routes/tasks.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, joinedload, selectinload

from backend.database import get_db
from backend.dependencies import valid_task_id
from backend.errors import NotFoundError
from backend.models import Task, TaskPriority, TaskStatus, Transcript, utcnow
from backend.schemas import (
    ApiResponse,
    MessageResponse,
    TaskDetail,
    TaskList,
    TaskStats,
    TaskWithTranscript,
    TranscriptStats,
    UpdateTaskRequest,
)
from backend.stats import build_chart_data, build_summary, summarize_counts

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _get_or_404(db: Session, task_id: str) -> Task:
    task = db.get(Task, task_id, options=[joinedload(Task.transcript)])
    if task is None:
        raise NotFoundError("Task not found")
    return task


@router.get("", response_model=ApiResponse[TaskList])
def list_tasks(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    tag: Optional[str] = None,
    q: Optional[str] = Query(None, max_length=200),
    db: Session = Depends(get_db),
):
    """All tasks, newest first, optionally filtered."""
    query = select(Task).options(joinedload(Task.transcript)).order_by(Task.created_at.desc())
    if status is not None:
        query = query.where(Task.status == status)
    if priority is not None:
        query = query.where(Task.priority == priority)
    if q and q.strip():
        needle = q.strip()
        query = query.where(or_(
            Task.title.icontains(needle, autoescape=True),
            Task.description.icontains(needle, autoescape=True),
        ))

    tasks = db.scalars(query).unique().all()
    if tag:
        # Tags are a JSON column, so match in Python
        wanted = tag.strip().lower()
        tasks = [task for task in tasks if wanted in (task.tags or [])]

    return ApiResponse[TaskList](
        message="Tasks retrieved successfully",
        data=TaskList(
            tasks=[TaskWithTranscript.model_validate(task) for task in tasks],
            summary=build_summary(tasks),
        ),
    )


@router.get("/stats", response_model=ApiResponse[TaskStats])
def task_statistics(db: Session = Depends(get_db)):
    """Overall and per-transcript completion plus chart series."""
    status_counts = dict(db.execute(select(Task.status, func.count(Task.id)).group_by(Task.status)).all())
    priority_counts = dict(db.execute(select(Task.priority, func.count(Task.id)).group_by(Task.priority)).all())

    total = sum(status_counts.values())
    completed = status_counts.get(TaskStatus.COMPLETED, 0)

    transcripts = db.scalars(
        select(Transcript).options(selectinload(Transcript.tasks)).order_by(Transcript.created_at.desc())
    ).all()
    by_transcript = []
    for transcript in transcripts:
        summary = build_summary(transcript.tasks)
        by_transcript.append(TranscriptStats(
            transcript_id=transcript.id,
            created_at=transcript.created_at,
            **summary.model_dump(),
        ))

    return ApiResponse[TaskStats](
        message="Task statistics retrieved successfully",
        data=TaskStats(
            overall=summarize_counts(total, completed),
            by_transcript=by_transcript,
            chart_data=build_chart_data(status_counts, priority_counts),
        ),
    )


@router.get("/{id}", response_model=ApiResponse[TaskDetail])
def get_task(task_id: str = Depends(valid_task_id), db: Session = Depends(get_db)):
    task = _get_or_404(db, task_id)
    return ApiResponse[TaskDetail](message="Task retrieved successfully", data=TaskDetail.model_validate(task))


@router.patch("/{id}", response_model=ApiResponse[TaskWithTranscript])
def update_task(body: UpdateTaskRequest, task_id: str = Depends(valid_task_id), db: Session = Depends(get_db)):
    """Change a task's status, priority or tags."""
    task = _get_or_404(db, task_id)
    if body.status is not None:
        task.status = body.status
    if body.priority is not None:
        task.priority = body.priority
    if body.tags is not None:
        task.tags = body.tags
    # onupdate only fires when a column actually changed
    task.updated_at = utcnow()
    db.commit()
    db.refresh(task)

    message = "Task status updated successfully" if body.status is not None else "Task updated successfully"
    return ApiResponse[TaskWithTranscript](message=message, data=TaskWithTranscript.model_validate(task))


@router.delete("/{id}", response_model=MessageResponse)
def delete_task(task_id: str = Depends(valid_task_id), db: Session = Depends(get_db)):
    task = _get_or_404(db, task_id)
    db.delete(task)
    db.commit()
    return MessageResponse(message="Task deleted successfully")
