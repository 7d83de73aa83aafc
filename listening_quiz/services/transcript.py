"""Convert bracket-marked transcripts to fill-in-the-blank templates and back."""
import re
from typing import List, Sequence, Tuple

from listening_quiz.schemas.question import BlankToken, Token

# Answers never span a line break
BLANK_PATTERN = re.compile(r"\[([^\[\]\n\r\u2028\u2029]+)\]")


def parse(transcript: str) -> Tuple[List[Token], List[str]]:
    """Split a transcript into tokens and the ordered list of answers.

    "City parks provide vital [amenities]." becomes
    tokens ["City parks provide vital ", BlankToken(blank=0), "."] and
    blanks ["amenities"]. Unmatched brackets stay literal text.
    """
    tokens: List[Token] = []
    blanks: List[str] = []
    cursor = 0
    for match in BLANK_PATTERN.finditer(transcript):
        if match.start() > cursor:
            tokens.append(transcript[cursor:match.start()])
        tokens.append(BlankToken(blank=len(blanks)))
        blanks.append(match.group(1))
        cursor = match.end()
    if cursor < len(transcript):
        tokens.append(transcript[cursor:])
    return tokens, blanks


def render(tokens: Sequence[Token], blanks: Sequence[str]) -> str:
    """Rebuild the editable transcript, wrapping each answer in brackets."""
    parts = []
    for token in tokens:
        if isinstance(token, BlankToken):
            parts.append(f"[{blanks[token.blank]}]")
        else:
            parts.append(token)
    return "".join(parts)
