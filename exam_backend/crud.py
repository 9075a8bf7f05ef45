import logging
from datetime import datetime, timezone
from typing import List, Optional

from exam_backend.database import ATTEMPTS, STUDENTS, TESTS, JsonStore
from exam_backend.exceptions import ForbiddenError, NotFoundError, ValidationError
from exam_backend.models import PUBLISHED, Attempt, Student, Test
from exam_backend.schemas import LoginRequest, SubmitRequest, TestCreate
from exam_backend.utils import is_numeric, is_valid_phone, new_id, public_fields, score_answers

logger = logging.getLogger(__name__)

LISTING_FIELDS = ["id", "title", "subject", "duration"]


def _find(documents: List[dict], **match) -> Optional[dict]:
    for document in documents:
        if all(document.get(key) == value for key, value in match.items()):
            return document
    return None


async def get_student_by_id(db: JsonStore, student_id: str):
    return _find(await db.aload(STUDENTS), id=student_id)


async def get_test_by_id(db: JsonStore, test_id: str):
    return _find(await db.aload(TESTS), id=test_id)


# ---------- STUDENT ----------

async def register_or_fetch(db: JsonStore, payload: LoginRequest) -> dict:
    """
    Return the student registered under (roll, className), creating it on
    first login. A repeat login never updates the stored record.
    """
    fields = [payload.name, payload.father, payload.roll, payload.class_name, payload.phone]
    if not all(fields):
        raise ValidationError("Invalid data")

    if not is_numeric(payload.roll) or not is_valid_phone(payload.phone):
        raise ValidationError("Invalid roll or phone")

    async with db.lock(STUDENTS):
        students = await db.aload(STUDENTS)
        student = _find(students, roll=payload.roll, className=payload.class_name)
        if student:
            logger.info("Student %s logged in (roll %s, class %s)", student["id"], payload.roll, payload.class_name)
            return student

        student = Student(
            id=new_id(s.get("id") for s in students),
            name=payload.name,
            father=payload.father,
            roll=payload.roll,
            class_name=payload.class_name,
            phone=payload.phone,
        ).model_dump(by_alias=True)
        students.append(student)
        await db.asave(STUDENTS, students)

    logger.info("Registered student %s (roll %s, class %s)", student["id"], payload.roll, payload.class_name)
    return student


async def list_available_tests(db: JsonStore, student_id: str) -> List[dict]:
    student = await get_student_by_id(db, student_id)
    if not student:
        raise NotFoundError("Student not found")

    attempted = {a.get("testId") for a in await db.aload(ATTEMPTS) if a.get("studentId") == student["id"]}

    return [
        public_fields(t, LISTING_FIELDS)
        for t in await db.aload(TESTS)
        if t.get("status") == PUBLISHED
        and t.get("className") == student.get("className")
        and t.get("id") not in attempted
    ]


async def get_test_paper(db: JsonStore, test_id: str) -> dict:
    test = await get_test_by_id(db, test_id)
    if not test:
        raise NotFoundError("Test not found")

    paper = public_fields(test, LISTING_FIELDS)
    paper["questions"] = [
        {"text": q.get("text"), "options": q.get("options", [])}
        for q in test.get("questions", [])
    ]
    return paper


async def submit_answers(db: JsonStore, payload: SubmitRequest) -> dict:
    async with db.lock(ATTEMPTS):
        attempts = await db.aload(ATTEMPTS)
        if _find(attempts, studentId=payload.student_id, testId=payload.test_id):
            logger.warning("Rejected repeat submission of test %s by student %s", payload.test_id, payload.student_id)
            raise ForbiddenError("Already attempted")

        test = await get_test_by_id(db, payload.test_id)
        if not test:
            raise NotFoundError("Test not found")

        score, total = score_answers(test.get("questions", []), payload.answers)
        attempt = Attempt(
            student_id=payload.student_id,
            test_id=payload.test_id,
            score=score,
            total=total,
            time=datetime.now(timezone.utc).isoformat(),
        )
        attempts.append(attempt.model_dump(by_alias=True))
        await db.asave(ATTEMPTS, attempts)

    logger.info("Student %s scored %d/%d on test %s", payload.student_id, score, total, payload.test_id)
    return {"score": score, "total": total}


# ---------- ADMIN ----------

async def create_test(db: JsonStore, payload: TestCreate) -> dict:
    """Tests are published as soon as they are created."""
    if (
        not payload.title
        or not payload.subject
        or not payload.class_name
        or not payload.duration
        or not payload.questions
    ):
        raise ValidationError("Invalid test")

    async with db.lock(TESTS):
        tests = await db.aload(TESTS)
        test = Test(
            id=new_id(t.get("id") for t in tests),
            title=payload.title,
            subject=payload.subject,
            class_name=payload.class_name,
            duration=payload.duration,
            questions=payload.questions,
            status=PUBLISHED,
        )
        tests.append(test.model_dump(by_alias=True))
        await db.asave(TESTS, tests)

    logger.info("Created test %s '%s' for class %s", test.id, test.title, test.class_name)
    return {"status": "created"}


async def list_results(db: JsonStore) -> List[dict]:
    """
    Join every attempt with its student and test. A reference that no longer
    resolves yields ``None`` instead of an error.
    """
    students = {}
    for s in await db.aload(STUDENTS):
        students.setdefault(s.get("id"), s)
    titles = {}
    for t in await db.aload(TESTS):
        titles.setdefault(t.get("id"), t.get("title"))

    return [
        {
            "student": students.get(a.get("studentId")),
            "test": titles.get(a.get("testId")),
            "score": a.get("score"),
            "total": a.get("total"),
            "time": a.get("time"),
        }
        for a in await db.aload(ATTEMPTS)
    ]
