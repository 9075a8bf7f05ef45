from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exam_backend.models import Question, Student


class CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Student side

class LoginRequest(CamelModel):
    """Presence and format are checked by the service, not here."""
    name: Optional[str] = None
    father: Optional[str] = None
    roll: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")
    phone: Optional[str] = None

    @field_validator("roll", "phone", mode="before")
    def numbers_as_text(cls, value):
        """Clients may send roll and phone as JSON numbers"""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class AvailableTest(BaseModel):
    id: str
    title: str
    subject: str
    duration: Union[int, float]


class PaperQuestion(BaseModel):
    """A question as shown to a student: no answer key."""
    text: str
    options: List[str]


class TestPaper(BaseModel):
    id: str
    title: str
    subject: str
    duration: Union[int, float]
    questions: List[PaperQuestion]


class SubmitRequest(CamelModel):
    student_id: str = Field(..., alias="studentId")
    test_id: str = Field(..., alias="testId")
    # Positional: answers[i] is compared with questions[i].correct
    answers: List[Any] = Field(default_factory=list)


class ScoreResponse(BaseModel):
    score: int
    total: int


# Admin side

class TestCreate(CamelModel):
    title: Optional[str] = None
    subject: Optional[str] = None
    class_name: Optional[str] = Field(default=None, alias="className")
    duration: Optional[Union[int, float]] = None
    questions: Optional[List[Question]] = None


class StatusResponse(BaseModel):
    status: str


class ResultRow(BaseModel):
    student: Optional[Student] = None
    test: Optional[str] = Field(default=None, description="Title of the attempted test")
    score: int
    total: int
    time: str


class ErrorResponse(BaseModel):
    error: str
