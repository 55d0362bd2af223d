"""Question and answer value types and their JSON column encodings.

Tasks store their questions and submissions store their answers as JSON.
The column types below are the only place that JSON is read or written;
everything above the ORM sees pydantic objects.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON
from sqlalchemy.types import TypeDecorator

from .enums import QuestionType


class CamelModel(BaseModel):
    """Base for models exchanged with the frontend in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class MultipleChoiceQuestion(CamelModel):
    type: Literal["multiple-choice"] = QuestionType.multiple_choice.value
    question: str
    options: list[str] = Field(..., min_length=1)
    correct_answer: int

    @model_validator(mode="after")
    def correct_answer_in_options(self) -> "MultipleChoiceQuestion":
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("correctAnswer must index into options")
        return self

    def is_correct(self, selected: Optional[int]) -> bool:
        return selected is not None and selected == self.correct_answer


class OpenEndedQuestion(CamelModel):
    """Free-text question. Stored verbatim and never scored."""

    type: Literal["open-ended"] = QuestionType.open_ended.value
    question: str
    options: list[str] = Field(default_factory=list)


def default_question_type(items: Any) -> Any:
    """Tag legacy questions that predate the ``type`` field as multiple-choice."""
    if not isinstance(items, list):
        return items
    tagged = []
    for item in items:
        if isinstance(item, dict) and item.get("type") is None:
            item = {**item, "type": QuestionType.multiple_choice.value}
        tagged.append(item)
    return tagged


Question = Annotated[Union[MultipleChoiceQuestion, OpenEndedQuestion], Field(discriminator="type")]
QuestionList = Annotated[list[Question], BeforeValidator(default_question_type)]


class Answer(CamelModel):
    """A student's answer to one question of the flattened lesson."""

    question_index: int
    selected_answer: Optional[int] = None
    text_answer: Optional[str] = None


question_list_adapter = TypeAdapter(QuestionList)
answer_list_adapter = TypeAdapter(list[Answer])


def _plain(items):
    return [
        item.model_dump(mode="json", by_alias=True) if isinstance(item, BaseModel) else item
        for item in items
    ]


class QuestionListType(TypeDecorator):
    """JSON column holding a task's ordered questions."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        questions = question_list_adapter.validate_python(_plain(value))
        return question_list_adapter.dump_python(questions, mode="json", by_alias=True)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return question_list_adapter.validate_python(value)


class AnswerListType(TypeDecorator):
    """JSON column holding a submission's answers."""

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        answers = answer_list_adapter.validate_python(_plain(value))
        return answer_list_adapter.dump_python(answers, mode="json", by_alias=True)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return answer_list_adapter.validate_python(value)
