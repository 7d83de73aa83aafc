import asyncio
import logging
from typing import List, Optional

from fastapi import HTTPException

from listening_quiz.schemas import Question, QuestionDraft, QuestionUpdate, SessionStateRead
from listening_quiz.services.question_store import QuestionStore
from listening_quiz.services.session import QuizSession


class RuntimeController:
    """Owns the question store, the play session, admin mode and the countdown task.

    One instance lives on ``app.state`` for the lifetime of the application.
    Every event runs under ``lock`` so the timer never interleaves with a
    request mid-transition.
    """

    def __init__(self, store: QuestionStore, admin_code: str, tick_seconds: float = 1.0):
        self.logger = logging.getLogger("runtime")
        self.admin_logger = logging.getLogger("admin")
        self.store = store
        self.admin_code = admin_code
        self.admin_mode = False
        self.tick_seconds = tick_seconds
        self.session: Optional[QuizSession] = None
        self.timer_task: Optional[asyncio.Task] = None
        self.lock = asyncio.Lock()

    async def start(self) -> None:
        await self.store.load()
        async with self.lock:
            self.session = QuizSession(self.store)
            self._start_timer()

    async def close(self) -> None:
        async with self.lock:
            self._cancel_timer()
        await self.store.close()

    def state(self) -> SessionStateRead:
        return self.session.snapshot()

    async def navigate(self, index: int) -> SessionStateRead:
        async with self.lock:
            if self.session.navigate(index):
                self._start_timer()
            return self.session.snapshot()

    async def next(self) -> SessionStateRead:
        return await self._step(1)

    async def previous(self) -> SessionStateRead:
        return await self._step(-1)

    async def _step(self, delta: int) -> SessionStateRead:
        async with self.lock:
            if self.session.navigate(self.session.active_index + delta):
                self._start_timer()
            return self.session.snapshot()

    async def type_answer(self, blank_index: int, text: str) -> SessionStateRead:
        async with self.lock:
            if not 0 <= blank_index < self.session.blanks_count:
                raise HTTPException(status_code=400, detail=f"Question has no blank {blank_index}")
            self.session.type_answer(blank_index, text)
            return self.session.snapshot()

    async def check(self) -> SessionStateRead:
        async with self.lock:
            self.session.check()
            return self.session.snapshot()

    async def show_answers(self) -> SessionStateRead:
        async with self.lock:
            self.session.show_answers()
            return self.session.snapshot()

    async def reset(self) -> SessionStateRead:
        async with self.lock:
            self.session.reset()
            self._start_timer()
            return self.session.snapshot()

    def _start_timer(self) -> None:
        self._cancel_timer()
        if not self.session.counting_down:
            return
        self.timer_task = asyncio.create_task(self._timer_loop())

    def _cancel_timer(self) -> None:
        if self.timer_task:
            self.timer_task.cancel()
            self.timer_task = None

    async def _timer_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            async with self.lock:
                self.session.tick()
                if not self.session.counting_down:
                    if self.timer_task is asyncio.current_task():
                        self.timer_task = None
                    return

    def unlock(self, code: str) -> None:
        if code != self.admin_code:
            self.admin_logger.warning("Admin unlock rejected")
            raise HTTPException(status_code=401, detail="Wrong code")
        self.admin_mode = True
        self.admin_logger.info("Admin mode unlocked")

    def exit_admin(self) -> None:
        self.admin_mode = False
        self.admin_logger.info("Admin mode exited")

    def questions(self) -> List[Question]:
        return self.store.all()

    async def add_question(self, draft: QuestionDraft) -> Question:
        async with self.lock:
            question = await self.store.add(draft)
            self._sync_session()
            return question

    async def update_question(self, question_id: str, draft: QuestionUpdate) -> Question:
        async with self.lock:
            question = await self.store.update(question_id, draft)
            self._sync_session()
            return question

    async def delete_question(self, question_id: str) -> None:
        async with self.lock:
            await self.store.delete(question_id)
            self._sync_session()

    def _sync_session(self) -> None:
        if self.session.sync():
            self.logger.info("Active question changed by edit, session reset")
            self._start_timer()
