import asyncio
from typing import Optional

import httpx

from bootstrap import bootstrap_portal
from integrity import IntegrityMonitor, LoggingNotifier, ManualSignalSource, Notifier, ViewportSignalSource
from logger import clear_session_id, configure_logging, get_logger, set_session_id
from portal_client import PortalClient
from session_controller import SessionController
from settings import Settings, get_settings

logger = get_logger("main")


async def open_portal(
    settings: Optional[Settings] = None,
    signals: Optional[ViewportSignalSource] = None,
    notifier: Optional[Notifier] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SessionController:
    """
    Wire client, monitor and session, then run the bootstrap chain for the demo user.
    The caller owns the returned controller and should `await controller.aclose()`.
    """
    settings = settings or get_settings()
    configure_logging(log_dir=settings.LOG_DIR, level=settings.LOG_LEVEL)
    set_session_id()

    signals = signals or ManualSignalSource()
    notifier = notifier or LoggingNotifier()
    client = PortalClient(settings.BACKEND_URL, timeout=settings.REQUEST_TIMEOUT, transport=transport)

    def new_monitor() -> IntegrityMonitor:
        return IntegrityMonitor(signals, notifier, settings.TAB_SWITCH_MESSAGE)

    controller = SessionController(
        client,
        new_monitor,
        notifier,
        failure_message=settings.SUBMISSION_FAILED_MESSAGE,
    )
    try:
        catalog = await bootstrap_portal(client, settings.DEMO_USER_NAME, settings.DEMO_USER_EMAIL)
    except Exception:
        await client.aclose()
        raise
    controller.load_catalog(catalog)
    return controller


async def main() -> None:
    settings = get_settings()
    controller = await open_portal(settings)
    try:
        state = controller.state
        logger.info("Signed in as %s", state.user.name)
        for m in state.modules:
            logger.info("module %s: %s", m.key, m.title)
        for d in state.days:
            mark = "x" if state.progress.is_completed(d.day_number) else " "
            logger.info("[%s] Day %d • %s: %s", mark, d.day_number, d.module_key.upper(), d.title)
        logger.info("Completed days: %d / %d", state.progress.completed_count, settings.TOTAL_DAYS)
    finally:
        await controller.aclose()
        clear_session_id()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
