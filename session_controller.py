"""
Quiz-session lifecycle.

BROWSING -> DAY_SELECTED -> QUIZ_ACTIVE -> RESULT -> BROWSING, plus a jump back to
DAY_SELECTED whenever another day is selected. The SessionState value is only ever
replaced here; other components read it.
"""
from enum import Enum
from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bootstrap import PortalCatalog
from integrity import IntegrityMonitor, Notifier
from logger import get_logger
from portal_client import PortalClient
from quiz_model import QuizModel
from schemas import AttemptResult, Day, Module, Progress, User
from submission import SubmissionCoordinator

logger = get_logger("session")

MonitorFactory = Callable[[], IntegrityMonitor]


class Phase(str, Enum):
    BROWSING = "browsing"
    DAY_SELECTED = "day_selected"
    QUIZ_ACTIVE = "quiz_active"
    RESULT = "result"


class SessionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.BROWSING
    day: Optional[Day] = None
    result: Optional[AttemptResult] = None
    user: Optional[User] = None
    modules: List[Module] = []
    days: List[Day] = []
    progress: Progress = Field(default_factory=Progress)


class SessionController:
    def __init__(
        self,
        client: PortalClient,
        monitor_factory: MonitorFactory,
        notifier: Notifier,
        failure_message: str = "Submission failed",
    ):
        self._client = client
        self._monitor_factory = monitor_factory
        self._monitor = monitor_factory()
        self._quiz = QuizModel()
        self._state = SessionState()
        # bumped on every day selection; lets late responses detect that the learner moved on
        self._selection = 0
        self._coordinator = SubmissionCoordinator(self, client, notifier, failure_message)

    # -----------------
    # Read-only views
    # -----------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def quiz_active(self) -> bool:
        return self._state.phase is Phase.QUIZ_ACTIVE

    @property
    def quiz(self) -> QuizModel:
        return self._quiz

    @property
    def monitor(self) -> IntegrityMonitor:
        return self._monitor

    @property
    def violations(self) -> int:
        return self._monitor.count

    @property
    def submitting(self) -> bool:
        return self._coordinator.in_flight

    @property
    def selection(self) -> int:
        return self._selection

    def find_day(self, day_number: int) -> Optional[Day]:
        return next((d for d in self._state.days if d.day_number == day_number), None)

    # -----------------
    # Transitions
    # -----------------

    def _advance(self, **changes) -> None:
        before = self._state.phase
        self._state = self._state.model_copy(update=changes)
        if self._state.phase is not before:
            logger.info("phase %s -> %s", before.value, self._state.phase.value)

    def _replace_monitor(self) -> None:
        self._monitor.set_armed(False)
        self._monitor = self._monitor_factory()

    def load_catalog(self, catalog: PortalCatalog) -> None:
        self._advance(
            user=catalog.user,
            modules=catalog.modules,
            days=catalog.days,
            progress=catalog.progress,
        )

    def select_day(self, day: Day) -> None:
        self._selection += 1
        self._replace_monitor()
        self._quiz.clear()
        self._advance(phase=Phase.DAY_SELECTED, day=day, result=None)

    async def start_quiz(self) -> None:
        day = self._state.day
        if self._state.phase is not Phase.DAY_SELECTED or day is None:
            logger.debug("start_quiz ignored in phase %s", self._state.phase.value)
            return

        selection = self._selection
        quiz = await self._client.get_quiz(day.day_number)
        if self._selection != selection or self._state.phase is not Phase.DAY_SELECTED:
            logger.info("discarding quiz for day %s: selection changed", day.day_number)
            return

        self._quiz.load(quiz)
        self._replace_monitor()
        self._monitor.set_armed(True)
        self._advance(phase=Phase.QUIZ_ACTIVE)

    def record_answer(self, question_index: int, option_index: int) -> None:
        if self._state.phase is not Phase.QUIZ_ACTIVE:
            logger.debug("record_answer ignored in phase %s", self._state.phase.value)
            return
        self._quiz.set_answer(question_index, option_index)

    async def submit(self) -> Optional[AttemptResult]:
        if self._state.phase is not Phase.QUIZ_ACTIVE:
            logger.debug("submit ignored in phase %s", self._state.phase.value)
            return None
        return await self._coordinator.submit()

    def complete_attempt(self, selection: int, result: AttemptResult) -> bool:
        """Bind a scored attempt, if the learner is still on the quiz it was taken for."""
        if self._selection != selection or self._state.phase is not Phase.QUIZ_ACTIVE:
            logger.info("attempt result not bound: learner left the quiz")
            return False
        self._quiz.clear()
        self._monitor.set_armed(False)
        self._advance(phase=Phase.RESULT, result=result)
        return True

    def apply_progress(self, progress: Progress) -> None:
        self._advance(progress=progress)

    def back_to_browsing(self) -> None:
        if self._state.phase not in (Phase.RESULT, Phase.DAY_SELECTED):
            logger.debug("back_to_browsing ignored in phase %s", self._state.phase.value)
            return
        self._advance(phase=Phase.BROWSING, day=None, result=None)

    async def aclose(self) -> None:
        self._monitor.set_armed(False)
        await self._client.aclose()
