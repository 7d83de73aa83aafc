import logging
from typing import Dict, Optional

from listening_quiz.schemas import Question, SessionQuestion, SessionStateRead
from listening_quiz.services import grading
from listening_quiz.services.question_store import QuestionStore


class QuizSession:
    """Play state for the active question: answers, checked flag, score and countdown.

    All transitions are synchronous; the owner drives ``tick`` once per second
    while ``counting_down`` is true.
    """

    def __init__(self, store: QuestionStore, active_index: int = 0):
        self.logger = logging.getLogger("runtime")
        self.store = store
        self.active_index = 0
        self.question: Optional[Question] = None
        self.user_answers: Dict[int, str] = {}
        self.checked = False
        self.score = 0
        self.time_remaining: Optional[int] = None
        self._load(min(max(active_index, 0), len(store) - 1))

    @property
    def blanks_count(self) -> int:
        return len(self.question.blanks)

    @property
    def counting_down(self) -> bool:
        return bool(self.time_remaining and self.time_remaining > 0)

    def _load(self, index: int) -> None:
        self.active_index = index
        self.question = self.store.at(index)
        self.reset()

    def navigate(self, index: int) -> bool:
        """Switch to another question. Out of range or current index is a no-op."""
        if not 0 <= index < len(self.store) or index == self.active_index:
            return False
        self._load(index)
        self.logger.info("Navigated to question index=%s id=%s", index, self.question.id)
        return True

    def next(self) -> bool:
        return self.navigate(self.active_index + 1)

    def previous(self) -> bool:
        return self.navigate(self.active_index - 1)

    def type_answer(self, blank_index: int, text: str) -> None:
        self.user_answers[blank_index] = text

    def check(self) -> bool:
        if self.checked:
            return False
        self.score = grading.score(self.user_answers, self.question.blanks)
        self.checked = True
        self.logger.info(
            "Checked question id=%s score=%s/%s", self.question.id, self.score, self.blanks_count
        )
        return True

    def show_answers(self) -> None:
        self.user_answers = grading.reveal_all(self.question.blanks)
        self.score = grading.score(self.user_answers, self.question.blanks)
        self.checked = True
        self.logger.info("Answers revealed question id=%s", self.question.id)

    def reset(self) -> None:
        self.user_answers = {}
        self.checked = False
        self.score = 0
        self.time_remaining = self.question.time_limit_sec
        # A zero limit has already run out
        self._expire_if_due()

    def tick(self) -> bool:
        """Count down one second. Returns True if this tick triggered the check."""
        if not self.counting_down:
            return False
        self.time_remaining -= 1
        return self._expire_if_due()

    def _expire_if_due(self) -> bool:
        if self.time_remaining == 0 and not self.checked:
            self.logger.info("Time is up for question id=%s", self.question.id)
            return self.check()
        return False

    def sync(self) -> bool:
        """Follow a changed collection; returns True if the session was reset."""
        index = min(self.active_index, len(self.store) - 1)
        if index == self.active_index and self.store.at(index) == self.question:
            return False
        self._load(index)
        return True

    def snapshot(self) -> SessionStateRead:
        q = self.question
        total = len(self.store)
        return SessionStateRead(
            active_index=self.active_index,
            total=total,
            progress=round((self.active_index + 1) / total * 100, 2),
            question=SessionQuestion(
                id=q.id,
                title=q.title,
                audio_url=q.audio_url,
                time_limit_sec=q.time_limit_sec,
                tokens=q.tokens,
            ),
            answers=dict(self.user_answers),
            checked=self.checked,
            score=self.score if self.checked else None,
            blanks_count=self.blanks_count,
            results=grading.results(self.user_answers, q.blanks) if self.checked else None,
            time_remaining=self.time_remaining,
        )
