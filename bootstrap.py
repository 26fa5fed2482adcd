"""
Initial portal load: create-user -> list-modules -> list-days -> get-progress.

Steps run strictly in order. The first failure aborts the rest and is reported as a
single BootstrapError; nothing partially loaded is returned.
"""
from typing import List

from pydantic import BaseModel

from logger import get_logger
from portal_client import PortalAPIError, PortalClient
from schemas import Day, Module, Progress, User

logger = get_logger("bootstrap")


class BootstrapError(Exception):
    def __init__(self, step: str, cause: Exception):
        super().__init__(f"Bootstrap failed at '{step}': {cause}")
        self.step = step


class PortalCatalog(BaseModel):
    user: User
    modules: List[Module]
    days: List[Day]
    progress: Progress


async def bootstrap_portal(client: PortalClient, name: str, email: str) -> PortalCatalog:
    step = "create_user"
    try:
        user = await client.create_user(name, email)
        step = "list_modules"
        modules = await client.list_modules()
        step = "list_days"
        days = await client.list_days()
        step = "get_progress"
        progress = await client.get_progress(user.id)
    except PortalAPIError as e:
        logger.error("bootstrap aborted step=%s error=%s", step, e)
        raise BootstrapError(step, e) from e

    logger.info(
        "bootstrap complete user=%s modules=%d days=%d completed=%d",
        user.id, len(modules), len(days), progress.completed_count,
    )
    return PortalCatalog(
        user=user,
        modules=sorted(modules, key=lambda m: m.order),
        days=sorted(days, key=lambda d: d.day_number),
        progress=progress,
    )
