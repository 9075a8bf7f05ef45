from types import SimpleNamespace

import pytest

from exam_backend import utils
from exam_backend.utils import is_numeric, is_valid_phone, new_id, score_answers, strictly_equal


@pytest.mark.parametrize("phone", ["9876543210", "6000000000", "7123456789", "8999999999"])
def test_valid_phones(phone):
    assert is_valid_phone(phone)


@pytest.mark.parametrize(
    "phone",
    ["12345", "5876543210", "98765432101", "987654321", "98765a3210", "", " 9876543210", "９８７６５４３２１０", None, 9876543210],
)
def test_invalid_phones(phone):
    assert not is_valid_phone(phone)


def test_numeric():
    assert is_numeric("1")
    assert is_numeric("007")
    assert not is_numeric("")
    assert not is_numeric("12a")
    assert not is_numeric("-1")
    assert not is_numeric("1.5")
    assert not is_numeric("١٢")
    assert not is_numeric(12)


def test_strict_equality_does_not_coerce():
    assert strictly_equal(1, 1)
    assert strictly_equal(1, 1.0)
    assert strictly_equal("4", "4")
    assert not strictly_equal(1, "1")
    assert not strictly_equal(1, True)
    assert not strictly_equal(0, False)
    assert not strictly_equal(None, 0)
    assert not strictly_equal([1], [1])


def test_score_counts_positional_matches():
    questions = [{"text": "a", "correct": 1}, {"text": "b", "correct": "x"}, {"text": "c", "correct": 0}]
    assert score_answers(questions, [1, "x", 0]) == (3, 3)
    assert score_answers(questions, [1, "y", 0]) == (2, 3)
    assert score_answers(questions, ["1", "x", False]) == (1, 3)


def test_score_total_ignores_answer_count():
    questions = [{"text": "a", "correct": 1}, {"text": "b", "correct": 2}]
    assert score_answers(questions, []) == (0, 2)
    assert score_answers(questions, [1]) == (1, 2)
    assert score_answers(questions, [1, 2, 3, 4]) == (2, 2)


def test_score_question_without_key_never_matches():
    assert score_answers([{"text": "a"}], [None]) == (0, 1)


def test_new_id_is_time_derived(monkeypatch):
    monkeypatch.setattr(utils, "time", SimpleNamespace(time=lambda: 1700000000.5))
    assert new_id([]) == "1700000000500"


def test_new_id_skips_taken_values(monkeypatch):
    monkeypatch.setattr(utils, "time", SimpleNamespace(time=lambda: 1700000000.5))
    assert new_id(["1700000000500", "1700000000501"]) == "1700000000502"
