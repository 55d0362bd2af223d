"""Scoring for lesson submissions.

Functions:
- flatten_questions: concatenate task questions in lesson order.
- count_correct: number of multiple-choice answers matching the key.
- score_answers: percentage score for a flattened lesson.

Nothing here touches the database; callers fetch the tasks first.
"""

from typing import Iterable, Sequence

from classroom.models.questions import Answer, MultipleChoiceQuestion, OpenEndedQuestion, Question

# A lesson with nothing to auto-grade cannot be failed
NOTHING_TO_GRADE_SCORE = 100


def flatten_questions(question_sets: Iterable[Sequence[Question]]) -> list[Question]:
    """Return one zero-indexed list of questions, preserving task order."""
    flat: list[Question] = []
    for questions in question_sets:
        flat.extend(questions)
    return flat


def is_scored(question: Question) -> bool:
    if isinstance(question, MultipleChoiceQuestion):
        return True
    if isinstance(question, OpenEndedQuestion):
        return False
    raise TypeError(f"Unknown question variant: {type(question).__name__}")


def count_correct(questions: Sequence[Question], answers: Iterable[Answer]) -> int:
    """Count answers that address a multiple-choice question and select its key.

    Only the first answer for a given question index is considered.
    """
    correct = 0
    seen: set[int] = set()
    for answer in answers:
        if not 0 <= answer.question_index < len(questions) or answer.question_index in seen:
            continue
        seen.add(answer.question_index)
        question = questions[answer.question_index]
        if is_scored(question) and question.is_correct(answer.selected_answer):
            correct += 1
    return correct


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; scores round .5 upwards
    return int(value + 0.5)


def score_answers(questions: Sequence[Question], answers: Iterable[Answer]) -> int:
    """Score answers against the flattened lesson as a 0-100 percentage."""
    scored_count = sum(1 for q in questions if is_scored(q))
    if scored_count == 0:
        return NOTHING_TO_GRADE_SCORE
    return round_half_up(count_correct(questions, answers) / scored_count * 100)
