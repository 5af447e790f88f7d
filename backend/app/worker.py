"""Worker process for the scheduled monthly leave accrual.

Runs an asyncio loop that attempts the accrual once per
``accrual_interval_seconds`` (daily by default). The run itself only posts
on the first of the month, while the accrual schedule is active, and is
idempotent per month.
"""

from __future__ import annotations

import asyncio
import logging

from app.config import get_settings
from app.db import get_session_factory
from app.logging_config import configure_logging

logger = logging.getLogger(__name__)


async def run_accrual_loop() -> None:
    """Attempt the monthly accrual once per configured interval, forever."""
    from app.services.accrual import regional_today, run_monthly_accrual

    logger.info("Accrual worker started")
    session_factory = get_session_factory()

    while True:
        today = regional_today()
        try:
            async with session_factory() as session:
                result = await run_monthly_accrual(session, today)
            if result.skipped_reason is not None:
                logger.debug("Accrual not due for %s: %s", today, result.skipped_reason)
            else:
                logger.info(
                    "Accrual run complete for %s: processed=%d accrued=%d skipped=%d errors=%d",
                    today,
                    result.processed,
                    result.accrued,
                    result.skipped,
                    result.errors,
                )
        except Exception:
            logger.exception("Accrual run failed for %s", today)

        await asyncio.sleep(get_settings().accrual_interval_seconds)


def main() -> None:
    """Entry point for the worker process."""
    configure_logging(get_settings().log_level)
    asyncio.run(run_accrual_loop())


if __name__ == "__main__":
    main()
