import re
import time
from typing import Any, Iterable, List, Sequence, Tuple

PHONE_RE = re.compile(r"[6-9][0-9]{9}")
NUMERIC_RE = re.compile(r"[0-9]+")


def is_valid_phone(value: Any) -> bool:
    return isinstance(value, str) and PHONE_RE.fullmatch(value) is not None


def is_numeric(value: Any) -> bool:
    return isinstance(value, str) and NUMERIC_RE.fullmatch(value) is not None


def _json_kind(value: Any) -> str:
    # bool is a subclass of int, so it has to be told apart first
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if value is None:
        return "null"
    return "object"


def strictly_equal(left: Any, right: Any) -> bool:
    """
    Equality without type coercion: an answer ``1`` never matches a key of
    ``"1"`` or ``true``. Lists and objects only match by identity, which for
    decoded JSON means they never match.
    """
    kind = _json_kind(left)
    if kind != _json_kind(right):
        return False
    if kind == "object":
        return left is right
    return left == right


def score_answers(questions: Sequence[dict], answers: Sequence[Any]) -> Tuple[int, int]:
    score = 0
    for i, question in enumerate(questions):
        if i < len(answers) and "correct" in question and strictly_equal(answers[i], question["correct"]):
            score += 1
    return score, len(questions)


def new_id(existing_ids: Iterable[str]) -> str:
    """Millisecond timestamp as a string, bumped past any id already taken."""
    taken = set(existing_ids)
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def public_fields(document: dict, fields: List[str]) -> dict:
    return {field: document.get(field) for field in fields}
