from typing import Dict, List, Mapping, Sequence


def _normalize(value: str) -> str:
    return value.strip().lower()


def is_correct(blank_index: int, user_answers: Mapping[int, str], expected: Sequence[str]) -> bool:
    """Return True if the entry for a blank matches its expected answer.

    Comparison ignores case and surrounding whitespace. A missing or empty
    entry is never correct.
    """
    answer = user_answers.get(blank_index)
    if not answer:
        return False
    return _normalize(answer) == _normalize(expected[blank_index])


def results(user_answers: Mapping[int, str], expected: Sequence[str]) -> List[bool]:
    return [is_correct(i, user_answers, expected) for i in range(len(expected))]


def score(user_answers: Mapping[int, str], expected: Sequence[str]) -> int:
    return sum(results(user_answers, expected))


def reveal_all(expected: Sequence[str]) -> Dict[int, str]:
    return {i: answer for i, answer in enumerate(expected)}
