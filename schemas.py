"""
Wire schemas for the AptLearn – 15-Day Interview Preparation Portal client

Each Pydantic model mirrors a JSON body exchanged with the portal backend. Unknown keys
sent by the backend (timestamps, day_number on questions, ...) are ignored.
"""
from pydantic import BaseModel, Field
from typing import List, Optional

# Answer slot value for "no option chosen yet"
UNANSWERED = -1


class UserIn(BaseModel):
    name: str
    email: str

class User(BaseModel):
    id: str
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")

class Module(BaseModel):
    key: str = Field(..., description="Unique key e.g., aptitude, technical, hr")
    title: str
    order: int = 0

class Day(BaseModel):
    day_number: int = Field(..., ge=1)
    module_key: str = Field(..., description="Module key this day belongs to")
    title: str
    video_url: str
    notes: str

class Question(BaseModel):
    prompt: str
    options: List[str]

class Quiz(BaseModel):
    day_number: int
    questions: List[Question]

class AttemptIn(BaseModel):
    user_id: str
    day_number: int
    answers: List[int]
    violations: int = Field(0, ge=0)

class AttemptResult(BaseModel):
    score: int
    total: int
    passed: bool
    flagged: bool = False
    violations: Optional[int] = None

    def summary(self) -> str:
        line = f"Score: {self.score} / {self.total} • {'Passed' if self.passed else 'Not passed'}"
        if self.flagged:
            line += " (flagged)"
        return line

class Progress(BaseModel):
    user_id: Optional[str] = None
    completed_days: List[int] = []

    @property
    def completed_count(self) -> int:
        return len(set(self.completed_days))

    def is_completed(self, day_number: int) -> bool:
        return day_number in self.completed_days
