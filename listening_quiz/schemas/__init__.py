from listening_quiz.schemas.question import (
    BlankToken,
    Question,
    QuestionAdminRead,
    QuestionDraft,
    QuestionSummary,
    QuestionUpdate,
    Token,
)
from listening_quiz.schemas.session import (
    PLAYBACK_RATES,
    AdminStatus,
    AnswerRequest,
    NavigateRequest,
    SessionQuestion,
    SessionStateRead,
    UnlockRequest,
)

__all__ = [
    "BlankToken",
    "Question",
    "QuestionAdminRead",
    "QuestionDraft",
    "QuestionSummary",
    "QuestionUpdate",
    "Token",
    "PLAYBACK_RATES",
    "AdminStatus",
    "AnswerRequest",
    "NavigateRequest",
    "SessionQuestion",
    "SessionStateRead",
    "UnlockRequest",
]
