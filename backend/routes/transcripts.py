# backend/routes/transcripts.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from backend.coordinator import TranscriptCoordinator
from backend.database import get_db
from backend.dependencies import get_coordinator, valid_transcript_id
from backend.errors import NotFoundError
from backend.models import Transcript
from backend.schemas import (
    ApiResponse,
    CreatedTranscript,
    CreateTranscriptRequest,
    MessageResponse,
    TaskOut,
    TranscriptOut,
    TranscriptWithContent,
)
from backend.stats import build_summary, summarize_counts

router = APIRouter(prefix="/api/transcripts", tags=["transcripts"])

PREVIEW_LENGTH = 200


def _preview(content: str) -> str:
    if len(content) > PREVIEW_LENGTH:
        return content[:PREVIEW_LENGTH] + "..."
    return content


def _transcript_out(transcript: Transcript, content: str) -> TranscriptOut:
    return TranscriptOut(
        id=transcript.id,
        content=content,
        created_at=transcript.created_at,
        tasks=[TaskOut.model_validate(task) for task in transcript.tasks],
        summary=build_summary(transcript.tasks),
    )


def _get_or_404(db: Session, transcript_id: str) -> Transcript:
    transcript = db.get(Transcript, transcript_id)
    if transcript is None:
        raise NotFoundError("Transcript not found")
    return transcript


@router.post("", status_code=201, response_model=ApiResponse[CreatedTranscript])
async def create_transcript(
    body: CreateTranscriptRequest,
    db: Session = Depends(get_db),
    coordinator: TranscriptCoordinator = Depends(get_coordinator),
):
    """Submit a transcript and generate its tasks."""
    transcript, tasks, source = await coordinator.process_transcript(db, body.content)
    return ApiResponse[CreatedTranscript](
        message="Transcript processed successfully",
        data=CreatedTranscript(
            transcript=TranscriptWithContent.model_validate(transcript),
            tasks=[TaskOut.model_validate(task) for task in tasks],
            summary=summarize_counts(len(tasks), 0),
            task_source=source,
        ),
    )


@router.get("", response_model=ApiResponse[List[TranscriptOut]])
def list_transcripts(db: Session = Depends(get_db)):
    """All transcripts, newest first, with a content preview."""
    transcripts = db.scalars(
        select(Transcript).options(selectinload(Transcript.tasks)).order_by(Transcript.created_at.desc())
    ).all()
    return ApiResponse[List[TranscriptOut]](
        message="Transcripts retrieved successfully",
        data=[_transcript_out(t, _preview(t.content)) for t in transcripts],
    )


@router.get("/{id}", response_model=ApiResponse[TranscriptOut])
def get_transcript(transcript_id: str = Depends(valid_transcript_id), db: Session = Depends(get_db)):
    transcript = _get_or_404(db, transcript_id)
    return ApiResponse[TranscriptOut](
        message="Transcript retrieved successfully",
        data=_transcript_out(transcript, transcript.content),
    )


@router.delete("/{id}", response_model=MessageResponse)
def delete_transcript(transcript_id: str = Depends(valid_transcript_id), db: Session = Depends(get_db)):
    """Delete a transcript together with its tasks."""
    transcript = _get_or_404(db, transcript_id)
    db.delete(transcript)
    db.commit()
    return MessageResponse(message="Transcript deleted successfully")
