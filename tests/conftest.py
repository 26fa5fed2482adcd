"""
Shared fixtures. Unit tests use fakes only; integration tests drive the real client
against the in-memory backend app over httpx.ASGITransport.
"""
import httpx
import pytest
import pytest_asyncio

from factories import SUBMIT_FAILED, TAB_SWITCH, RecordingNotifier
from fake_backend import BackendStore, create_backend
from integrity import IntegrityMonitor, ManualSignalSource
from portal_client import PortalClient
from session_controller import SessionController


@pytest.fixture
def signals() -> ManualSignalSource:
    return ManualSignalSource()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def monitor_factory(signals, notifier):
    def factory() -> IntegrityMonitor:
        return IntegrityMonitor(signals, notifier, TAB_SWITCH)
    return factory


# ----- In-memory backend -----
@pytest.fixture
def backend_store() -> BackendStore:
    return BackendStore(questions_per_day=3)


@pytest.fixture
def transport(backend_store) -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_backend(backend_store))


@pytest_asyncio.fixture
async def portal_client(transport):
    async with PortalClient("http://testserver", transport=transport) as client:
        yield client


@pytest.fixture
def session(portal_client, monitor_factory, notifier) -> SessionController:
    return SessionController(portal_client, monitor_factory, notifier, failure_message=SUBMIT_FAILED)
