from typing import List, Optional

from schemas import UNANSWERED, Quiz


class QuizModel:
    """The active quiz and the learner's in-progress answers, one slot per question."""

    def __init__(self):
        self._quiz: Optional[Quiz] = None
        self._answers: List[int] = []

    @property
    def quiz(self) -> Optional[Quiz]:
        return self._quiz

    @property
    def is_loaded(self) -> bool:
        return self._quiz is not None

    @property
    def answers(self) -> List[int]:
        return list(self._answers)

    @property
    def answered_count(self) -> int:
        return sum(1 for a in self._answers if a != UNANSWERED)

    def load(self, quiz: Quiz) -> None:
        self._quiz = quiz
        self._answers = [UNANSWERED] * len(quiz.questions)

    def clear(self) -> None:
        self._quiz = None
        self._answers = []

    def set_answer(self, question_index: int, option_index: int) -> None:
        if self._quiz is None:
            raise RuntimeError("No quiz loaded")
        if not 0 <= question_index < len(self._answers):
            raise IndexError(f"Question {question_index} out of range (0..{len(self._answers) - 1})")
        options = self._quiz.questions[question_index].options
        if option_index != UNANSWERED and not 0 <= option_index < len(options):
            raise ValueError(f"Option {option_index} out of range for question {question_index}")
        self._answers[question_index] = option_index
