"""Scheduled expiry sweep."""

from typing import Optional
from firebase_functions import scheduler_fn, options
from subscription_backend.apis.Db import Db
from subscription_backend.config.loader import get_sweep_schedule
from subscription_backend.models.function_types import SweepResult
from subscription_backend.services.expiry_sweep_service import ExpirySweepService
from subscription_backend.util.logger import get_logger

logger = get_logger(__name__)

SWEEP_SCHEDULE = get_sweep_schedule()


def handle_scheduled_expiry_check(db: Optional[Db] = None) -> SweepResult:
    """Revoke Pro access for every expired subscription.

    Failures are logged and reported in the result; the next run retries the
    same users because a failed batch persists nothing.
    """
    try:
        return ExpirySweepService(db).sweep()
    except Exception as e:
        logger.error(f"Error in scheduled expiry check: {e}")
        return {"success": False, "error": str(e)}


@scheduler_fn.on_schedule(
    schedule=SWEEP_SCHEDULE["schedule"],
    timezone=SWEEP_SCHEDULE["timezone"],
    memory=options.MemoryOption.MB_256,
    timeout_sec=300,
)
def scheduled_expiry_check(event: scheduler_fn.ScheduledEvent) -> None:
    """Daily sweep revoking Pro access from users whose subscription expired.

    Args:
        event: Scheduler event
    """
    result = handle_scheduled_expiry_check()
    logger.info(f"Scheduled expiry check finished: {result}")
