"""APScheduler setup for batch jobs."""
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

from market_monitor.api.dependencies import get_price_alert_service, get_statistic_service
from market_monitor.config import app_config
from market_monitor.domain.entities import InstrumentType

logger = logging.getLogger(__name__)


def update_statistics() -> None:
    """Recalculate the stock market statistics."""
    logger.info("Starting statistic update...")
    try:
        result = get_statistic_service().update_statistics(InstrumentType.STOCK)
        for message in result.messages:
            logger.info(message.text)
    except Exception as e:
        logger.error(f"Error updating statistics: {e}")


def check_price_alerts() -> None:
    """Evaluate untriggered price alerts against current quotes."""
    try:
        get_price_alert_service().check_price_alerts()
    except Exception as e:
        logger.error(f"Error checking price alerts: {e}")


def setup_scheduler() -> AsyncIOScheduler:
    """Create and configure scheduler."""
    scheduler = AsyncIOScheduler()
    scheduler.add_job(
        update_statistics,
        CronTrigger(day_of_week="mon-fri", hour=app_config.STATISTIC_UPDATE_HOUR),
        id="update_statistics",
        name="Recalculate breadth statistics after market close",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    scheduler.add_job(
        check_price_alerts,
        IntervalTrigger(seconds=app_config.ALERT_CHECK_INTERVAL_SECONDS),
        id="check_price_alerts",
        name="Check price alerts against current quotes",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    return scheduler
