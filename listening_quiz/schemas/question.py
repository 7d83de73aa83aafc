from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire and in storage."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BlankToken(BaseModel):
    blank: int = Field(ge=0)


# A token is either literal transcript text or a placeholder for one blank
Token = Union[str, BlankToken]


class Question(CamelModel):
    id: str
    title: str
    audio_url: str
    time_limit_sec: Optional[int] = Field(default=None, ge=0)
    tokens: List[Token] = Field(default_factory=list)
    blanks: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_blank_indices(self) -> "Question":
        for token in self.tokens:
            if isinstance(token, BlankToken) and token.blank >= len(self.blanks):
                raise ValueError(
                    f"token references blank {token.blank} but question has {len(self.blanks)} answers"
                )
        return self


class QuestionDraft(CamelModel):
    id: Optional[str] = None
    title: str = ""
    transcript: str = ""
    audio_url: str = ""
    time_limit_sec: Optional[int] = Field(default=None, ge=0)


class QuestionUpdate(CamelModel):
    title: Optional[str] = None
    transcript: Optional[str] = None
    audio_url: Optional[str] = None
    time_limit_sec: Optional[int] = Field(default=None, ge=0)


class QuestionSummary(CamelModel):
    id: str
    title: str


class QuestionAdminRead(Question):
    transcript: str
