import uuid
from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from listening_quiz.core.config import settings
from listening_quiz.dependencies import get_runtime, require_admin
from listening_quiz.schemas import (
    AdminStatus,
    Question,
    QuestionAdminRead,
    QuestionDraft,
    QuestionUpdate,
    UnlockRequest,
)
from listening_quiz.services.runtime import RuntimeController
from listening_quiz.services.transcript import render

router = APIRouter(prefix="/admin", tags=["admin"])

ALLOWED_AUDIO = {"audio/mpeg", "audio/mp3", "audio/wav", "audio/ogg", "audio/x-wav"}


def serialize_question(question: Question) -> QuestionAdminRead:
    return QuestionAdminRead(
        **question.model_dump(),
        transcript=render(question.tokens, question.blanks),
    )


@router.post("/unlock", response_model=AdminStatus)
async def unlock(payload: UnlockRequest, runtime: RuntimeController = Depends(get_runtime)):
    runtime.unlock(payload.code)
    return AdminStatus(admin_mode=runtime.admin_mode)


@router.post("/lock", response_model=AdminStatus)
async def lock(runtime: RuntimeController = Depends(get_runtime)):
    runtime.exit_admin()
    return AdminStatus(admin_mode=runtime.admin_mode)


@router.get("/status", response_model=AdminStatus)
async def status(runtime: RuntimeController = Depends(get_runtime)):
    return AdminStatus(admin_mode=runtime.admin_mode)


@router.get("/questions", response_model=List[QuestionAdminRead])
async def list_questions(runtime: RuntimeController = Depends(require_admin)):
    return [serialize_question(q) for q in runtime.questions()]


@router.get("/questions/{question_id}", response_model=QuestionAdminRead)
async def get_question(question_id: str, runtime: RuntimeController = Depends(require_admin)):
    return serialize_question(runtime.store.get(question_id))


@router.post("/questions", response_model=QuestionAdminRead, status_code=201)
async def add_question(payload: QuestionDraft, runtime: RuntimeController = Depends(require_admin)):
    question = await runtime.add_question(payload)
    return serialize_question(question)


@router.patch("/questions/{question_id}", response_model=QuestionAdminRead)
async def update_question(
    question_id: str,
    payload: QuestionUpdate,
    runtime: RuntimeController = Depends(require_admin),
):
    question = await runtime.update_question(question_id, payload)
    return serialize_question(question)


@router.delete("/questions/{question_id}")
async def delete_question(question_id: str, runtime: RuntimeController = Depends(require_admin)):
    await runtime.delete_question(question_id)
    return {"deleted": question_id}


@router.post("/upload")
async def upload_audio(
    file: UploadFile = File(...),
    runtime: RuntimeController = Depends(require_admin),
):
    if file.content_type not in ALLOWED_AUDIO:
        raise HTTPException(status_code=400, detail="Unsupported audio type")

    ext = Path(file.filename or "").suffix or ".mp3"
    filename = f"{uuid.uuid4()}{ext}"
    target_dir = settings.media_root / "audio"
    target_dir.mkdir(parents=True, exist_ok=True)
    destination = target_dir / filename

    data = await file.read()
    destination.write_bytes(data)
    runtime.admin_logger.info("Audio uploaded filename=%s bytes=%s", filename, len(data))

    url = f"/media/audio/{filename}"
    return {"url": url, "filename": filename, "content_type": file.content_type}
