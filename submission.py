"""
One attempt submission per submit action.

The payload (answers + violation count) is snapshotted before the request is sent;
violations that arrive while the request is in flight belong to the next read of the
counter, not to this attempt. A failed request leaves the quiz exactly as it was.
"""
from typing import TYPE_CHECKING, Optional

from integrity import Notifier
from logger import get_logger
from portal_client import PortalAPIError, PortalClient
from schemas import AttemptIn, AttemptResult

if TYPE_CHECKING:
    from session_controller import SessionController

logger = get_logger("submission")


class SubmissionCoordinator:
    def __init__(
        self,
        session: "SessionController",
        client: PortalClient,
        notifier: Notifier,
        failure_message: str,
    ):
        self._session = session
        self._client = client
        self._notifier = notifier
        self._failure_message = failure_message
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def build_payload(self) -> Optional[AttemptIn]:
        state = self._session.state
        if not self._session.quiz_active or state.user is None or state.day is None:
            return None
        return AttemptIn(
            user_id=state.user.id,
            day_number=state.day.day_number,
            answers=self._session.quiz.answers,
            violations=self._session.monitor.count,
        )

    async def submit(self) -> Optional[AttemptResult]:
        if self._in_flight:
            logger.info("submit ignored: attempt already in flight")
            return None

        payload = self.build_payload()
        if payload is None:
            logger.debug("submit ignored: no user, day or active quiz")
            return None
        selection = self._session.selection

        self._in_flight = True
        try:
            logger.info(
                "submitting day=%s answered=%d/%d violations=%d",
                payload.day_number,
                self._session.quiz.answered_count,
                len(payload.answers),
                payload.violations,
            )
            try:
                result = await self._client.submit_attempt(payload)
            except PortalAPIError as e:
                logger.warning("submission failed day=%s status=%s: %s", payload.day_number, e.status_code, e)
                self._notifier.alert(self._failure_message)
                return None

            logger.info("attempt scored day=%s %s", payload.day_number, result.summary())
            self._session.complete_attempt(selection, result)
            await self._refresh_progress(payload.user_id)
            return result
        finally:
            self._in_flight = False

    async def _refresh_progress(self, user_id: str) -> None:
        try:
            progress = await self._client.get_progress(user_id)
        except PortalAPIError as e:
            logger.warning("progress refresh failed user=%s: %s", user_id, e)
            return
        self._session.apply_progress(progress)
