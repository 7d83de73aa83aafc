from typing import List

from fastapi import APIRouter, Depends

from listening_quiz.dependencies import get_runtime
from listening_quiz.schemas import (
    PLAYBACK_RATES,
    AnswerRequest,
    NavigateRequest,
    QuestionSummary,
    SessionStateRead,
)
from listening_quiz.services.runtime import RuntimeController

router = APIRouter(prefix="/api", tags=["play"])


@router.get("/questions", response_model=List[QuestionSummary])
async def list_questions(runtime: RuntimeController = Depends(get_runtime)):
    return [QuestionSummary(id=q.id, title=q.title) for q in runtime.questions()]


@router.get("/playback-rates", response_model=List[float])
async def playback_rates():
    return list(PLAYBACK_RATES)


@router.get("/session", response_model=SessionStateRead)
async def session_state(runtime: RuntimeController = Depends(get_runtime)):
    return runtime.state()


@router.post("/session/navigate", response_model=SessionStateRead)
async def navigate(payload: NavigateRequest, runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.navigate(payload.index)


@router.post("/session/next", response_model=SessionStateRead)
async def next_question(runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.next()


@router.post("/session/previous", response_model=SessionStateRead)
async def previous_question(runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.previous()


@router.put("/session/answers/{blank_index}", response_model=SessionStateRead)
async def type_answer(
    blank_index: int,
    payload: AnswerRequest,
    runtime: RuntimeController = Depends(get_runtime),
):
    return await runtime.type_answer(blank_index, payload.text)


@router.post("/session/check", response_model=SessionStateRead)
async def check_answers(runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.check()


@router.post("/session/show-answers", response_model=SessionStateRead)
async def show_answers(runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.show_answers()


@router.post("/session/reset", response_model=SessionStateRead)
async def reset_session(runtime: RuntimeController = Depends(get_runtime)):
    return await runtime.reset()
