from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from simplylearn.models.quiz import QuestionType


class QuestionIn(BaseModel):
    question_text: str = Field(min_length=1)
    options: list[str] = Field(min_length=2)
    correct_option_index: int = Field(ge=0)
    type: QuestionType = QuestionType.MULTIPLE_CHOICE

    @model_validator(mode="after")
    def _check_correct_index(self):
        if self.correct_option_index >= len(self.options):
            raise ValueError("correct_option_index must point at one of the options")
        return self


class QuizCreate(BaseModel):
    course_id: int
    title: str = Field(min_length=1, max_length=255)
    questions: list[QuestionIn] = Field(min_length=1)
    timer_limit: int = Field(default=30, gt=0)


class QuestionPublic(BaseModel):
    """A question as a student sees it: no answer key."""

    id: int
    position: int
    question_text: str
    options: list[str]
    type: QuestionType

    class Config:
        from_attributes = True


class QuestionRead(QuestionPublic):
    correct_option_index: int


class QuizPublic(BaseModel):
    id: int
    course_id: int
    title: str
    timer_limit: int
    created_at: datetime
    questions: list[QuestionPublic]

    class Config:
        from_attributes = True


class QuizRead(QuizPublic):
    questions: list[QuestionRead]


class QuizSubmit(BaseModel):
    # question position -> chosen option index
    answers: dict[int, int]


class QuizResultRead(BaseModel):
    id: int
    quiz_id: int
    student_id: int
    answers: dict[int, int]
    score: int
    total_questions: int
    percentage: float
    submitted_at: datetime

    class Config:
        from_attributes = True
