"""Background jobs embedded in the HTTP server process.

``create_background_scheduler()`` returns a ``BackgroundScheduler`` that the
FastAPI app starts in its ``lifespan`` handler. Jobs:
  - notification purge: drops notifications older than their TTL
  - low stock report: logs products at or below their reorder threshold
"""

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .services.inventory_service import InventoryService
from .utils.config import get_config
from .utils.logger import get_inventory_logger, get_scheduler_logger


def _make_purge_job(service: InventoryService):
    """Create the notification-expiry job callable."""
    logger = get_inventory_logger()

    def purge_job():
        removed = service.notifications.purge_expired()
        if removed:
            logger.debug(f"Purged {removed} expired notification(s)")

    return purge_job


def _make_low_stock_job(service: InventoryService):
    """Create the periodic low-stock report callable."""
    logger = get_inventory_logger()

    def low_stock_job():
        low_stock = service.low_stock_products()
        if not low_stock:
            logger.info("Low stock report: all products above their reorder threshold")
            return

        logger.warning(f"Low stock report: {len(low_stock)} product(s) at or below threshold")
        for product in low_stock[:10]:
            logger.warning(
                f"  {product.sku} {product.name}: {product.stock} (min {product.min_stock_rule}) @ {product.location}"
            )
        if len(low_stock) > 10:
            logger.warning(f"  ... and {len(low_stock) - 10} more")

    return low_stock_job


def create_background_scheduler(service: InventoryService) -> BackgroundScheduler:
    """Create a ``BackgroundScheduler`` bound to ``service``.

    The scheduler is returned **not started**; the caller invokes
    ``scheduler.start()`` when ready.
    """
    config = get_config()
    get_scheduler_logger()

    scheduler = BackgroundScheduler(timezone=config.scheduler.timezone)

    scheduler.add_job(
        func=_make_purge_job(service),
        trigger=IntervalTrigger(seconds=config.notifications.purge_interval_seconds),
        id="notification_purge",
        name="Expire notifications",
        max_instances=config.scheduler.max_instances,
        coalesce=config.scheduler.coalesce,
        replace_existing=True
    )

    scheduler.add_job(
        func=_make_low_stock_job(service),
        trigger=IntervalTrigger(minutes=config.scheduler.low_stock_report_minutes),
        id="low_stock_report",
        name="Low stock report",
        max_instances=config.scheduler.max_instances,
        coalesce=config.scheduler.coalesce,
        replace_existing=True
    )

    return scheduler
