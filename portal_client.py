"""
Async client for the portal backend.

Thin wrapper over httpx: one method per backend route, JSON in and out. Any
non-success response is raised as PortalAPIError carrying the response body text.
"""
from typing import Any, List, Optional

import httpx
from pydantic import ValidationError

from logger import get_logger, log_call
from schemas import AttemptIn, AttemptResult, Day, Module, Progress, Quiz, User, UserIn

logger = get_logger("client")


class PortalAPIError(Exception):
    """A backend call failed (HTTP error status, transport failure or bad body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PortalClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )

    async def __aenter__(self) -> "PortalClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, body: Optional[dict] = None) -> Any:
        with log_call(logger, f"{method} {path}"):
            try:
                response = await self._http.request(method, path, json=body)
            except httpx.HTTPError as e:
                raise PortalAPIError(f"{type(e).__name__}: {e}") from e
            if not response.is_success:
                raise PortalAPIError(response.text, status_code=response.status_code)
            try:
                return response.json()
            except ValueError as e:
                raise PortalAPIError(f"Invalid JSON from {path}", status_code=response.status_code) from e

    async def _fetch(self, model, method: str, path: str, body: Optional[dict] = None):
        data = await self._request(method, path, body)
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PortalAPIError(f"Unexpected response from {path}: {e}") from e

    async def _fetch_list(self, model, path: str) -> list:
        data = await self._request("GET", path)
        if not isinstance(data, list):
            raise PortalAPIError(f"Unexpected response from {path}: expected a list")
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as e:
            raise PortalAPIError(f"Unexpected response from {path}: {e}") from e

    # -----------------
    # Portal endpoints
    # -----------------

    async def create_user(self, name: str, email: str) -> User:
        body = UserIn(name=name, email=email).model_dump()
        return await self._fetch(User, "POST", "/users", body)

    async def list_modules(self) -> List[Module]:
        return await self._fetch_list(Module, "/modules")

    async def list_days(self) -> List[Day]:
        return await self._fetch_list(Day, "/days")

    async def get_progress(self, user_id: str) -> Progress:
        return await self._fetch(Progress, "GET", f"/progress/{user_id}")

    async def get_quiz(self, day_number: int) -> Quiz:
        return await self._fetch(Quiz, "GET", f"/quiz/{day_number}")

    async def submit_attempt(self, payload: AttemptIn) -> AttemptResult:
        return await self._fetch(AttemptResult, "POST", "/attempt", payload.model_dump())
