import json
import logging
from typing import List, Optional, Protocol

from fastapi import HTTPException
from pydantic import TypeAdapter, ValidationError

from listening_quiz.core.time import epoch_millis
from listening_quiz.schemas import Question, QuestionDraft, QuestionUpdate
from listening_quiz.services.remote_mirror import RemoteMirror
from listening_quiz.services.transcript import parse

SEED_QUESTIONS = [
    {
        "id": "q1",
        "title": "Urban parks audio clip",
        "audioUrl": "https://www.soundhelix.com/examples/mp3/SoundHelix-Song-1.mp3",
        "timeLimitSec": 90,
        "tokens": [
            "City parks provide vital ",
            {"blank": 0},
            " for residents, offering spaces for ",
            {"blank": 1},
            ", relaxation, and community events.",
        ],
        "blanks": ["amenities", "exercise"],
    },
]

question_list = TypeAdapter(List[Question])


def seed_questions() -> List[Question]:
    return question_list.validate_python(SEED_QUESTIONS)


def require_text(value: Optional[str]) -> None:
    if not value or not value.strip():
        raise HTTPException(status_code=400, detail="Need title, transcript and audio URL")


class Storage(Protocol):
    async def read(self, key: str) -> Optional[str]: ...

    async def write(self, key: str, value: str) -> None: ...


class QuestionStore:
    """Ordered question collection, persisted locally and mirrored remotely."""

    def __init__(
        self,
        storage: Storage,
        mirror: Optional[RemoteMirror] = None,
        key: str = "fib-questions",
        questions: Optional[List[Question]] = None,
    ):
        self.logger = logging.getLogger("store")
        self.storage = storage
        self.mirror = mirror
        self.key = key
        self._questions: List[Question] = list(questions or [])

    def __len__(self) -> int:
        return len(self._questions)

    def all(self) -> List[Question]:
        return list(self._questions)

    def at(self, index: int) -> Question:
        return self._questions[index]

    def index_of(self, question_id: str) -> int:
        for idx, question in enumerate(self._questions):
            if question.id == question_id:
                return idx
        raise HTTPException(status_code=404, detail="Question not found")

    def get(self, question_id: str) -> Question:
        return self._questions[self.index_of(question_id)]

    async def load(self) -> List[Question]:
        raw = await self.storage.read(self.key)
        self._questions = self._decode(raw)
        self.logger.info("Loaded %s questions key=%s", len(self._questions), self.key)
        return self.all()

    def _decode(self, raw: Optional[str]) -> List[Question]:
        if raw is None:
            self.logger.info("No stored questions under key=%s, using seed data", self.key)
            return seed_questions()
        try:
            questions = question_list.validate_json(raw)
        except ValidationError as exc:
            self.logger.warning("Stored questions unreadable key=%s, using seed data: %s", self.key, exc)
            return seed_questions()
        if not questions:
            self.logger.warning("Stored question list is empty key=%s, using seed data", self.key)
            return seed_questions()

        unique: List[Question] = []
        seen = set()
        for question in questions:
            if question.id in seen:
                self.logger.warning("Dropping duplicate stored question id=%s", question.id)
                continue
            seen.add(question.id)
            unique.append(question)
        return unique

    def _new_id(self) -> str:
        taken = {q.id for q in self._questions}
        stamp = epoch_millis()
        while f"q{stamp}" in taken:
            stamp += 1
        return f"q{stamp}"

    async def add(self, draft: QuestionDraft) -> Question:
        require_text(draft.title)
        require_text(draft.transcript)
        require_text(draft.audio_url)
        if draft.id and any(q.id == draft.id for q in self._questions):
            raise HTTPException(status_code=409, detail=f"Question id {draft.id} already exists")

        tokens, blanks = parse(draft.transcript)
        question = Question(
            id=draft.id or self._new_id(),
            title=draft.title,
            audio_url=draft.audio_url,
            time_limit_sec=draft.time_limit_sec,
            tokens=tokens,
            blanks=blanks,
        )
        await self._commit(self._questions + [question])
        self.logger.info("Question added id=%s blanks=%s", question.id, len(blanks))
        return question

    async def update(self, question_id: str, draft: QuestionUpdate) -> Question:
        idx = self.index_of(question_id)
        current = self._questions[idx]

        changes = {}
        for field in ("title", "audio_url"):
            value = getattr(draft, field)
            if value is not None:
                require_text(value)
                changes[field] = value
        # An explicit null clears the limit, an omitted field keeps it
        if "time_limit_sec" in draft.model_fields_set:
            changes["time_limit_sec"] = draft.time_limit_sec
        if draft.transcript is not None:
            require_text(draft.transcript)
            changes["tokens"], changes["blanks"] = parse(draft.transcript)

        updated = Question.model_validate({**current.model_dump(), **changes})
        questions = list(self._questions)
        questions[idx] = updated
        await self._commit(questions)
        self.logger.info("Question updated id=%s fields=%s", question_id, sorted(changes))
        return updated

    async def delete(self, question_id: str) -> None:
        idx = self.index_of(question_id)
        if len(self._questions) == 1:
            raise HTTPException(status_code=409, detail="Cannot delete the only question")
        await self._commit(self._questions[:idx] + self._questions[idx + 1:])
        self.logger.info("Question deleted id=%s", question_id)

    async def _commit(self, questions: List[Question]) -> None:
        payload = [q.model_dump(mode="json", by_alias=True) for q in questions]
        await self.storage.write(self.key, json.dumps(payload))
        self._questions = questions
        if self.mirror:
            self.mirror.schedule(payload)

    async def close(self) -> None:
        if self.mirror:
            await self.mirror.drain(timeout=self.mirror.timeout)
