from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from listening_quiz.schemas.question import CamelModel, Token

PLAYBACK_RATES = (0.25, 0.5, 0.75, 1, 2, 4, 5, 10)


class SessionQuestion(CamelModel):
    """Active question as shown to the player, expected answers withheld."""

    id: str
    title: str
    audio_url: str
    time_limit_sec: Optional[int] = None
    tokens: List[Token] = Field(default_factory=list)


class SessionStateRead(CamelModel):
    active_index: int
    total: int
    progress: float
    question: SessionQuestion
    answers: Dict[int, str] = Field(default_factory=dict)
    checked: bool = False
    score: Optional[int] = None
    blanks_count: int
    results: Optional[List[bool]] = None
    time_remaining: Optional[int] = None


class NavigateRequest(BaseModel):
    index: int


class AnswerRequest(BaseModel):
    text: str = ""


class UnlockRequest(BaseModel):
    code: str


class AdminStatus(CamelModel):
    admin_mode: bool
