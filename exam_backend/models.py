from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field

PUBLISHED = "published"


class Document(BaseModel):
    """Base for stored documents; fields outside the model survive a load/save."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Student(Document):
    id: str
    name: str
    father: str
    roll: str
    class_name: str = Field(..., alias="className")
    phone: str


class Question(Document):
    text: str
    options: List[str] = Field(default_factory=list)
    # Index of the right option, or the option value itself
    correct: Any


class Test(Document):
    id: str
    title: str
    subject: str
    class_name: str = Field(..., alias="className")
    duration: Union[int, float]
    questions: List[Question]
    status: str = PUBLISHED


class Attempt(Document):
    student_id: str = Field(..., alias="studentId")
    test_id: str = Field(..., alias="testId")
    score: int
    total: int
    # ISO-8601, UTC
    time: str
