"""Market monitor API application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from market_monitor.api.dependencies import init_services
from market_monitor.api.routes import chart_objects, health, price_alerts, quotes, statistics
from market_monitor.config import app_config
from market_monitor.domain.messages import configure_catalog
from market_monitor.infrastructure.scheduler import setup_scheduler
from market_monitor.repository.clickhouse_client import ClickHouseConnection
from market_monitor.repository.schema import ensure_schema

logging.basicConfig(
    level=app_config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect storage, wire services and run the batch jobs while the app is up."""
    catalog = configure_catalog(app_config.LOCALE)
    logger.info(f"Starting market monitor (locale {catalog.locale})")

    connection = ClickHouseConnection()
    connection.connect()
    ensure_schema(connection)
    init_services(connection)

    job_scheduler = setup_scheduler()
    job_scheduler.start()
    health.set_health_dependencies(job_scheduler)
    logger.info(f"Scheduled jobs: {', '.join(job.id for job in job_scheduler.get_jobs())}")

    try:
        yield
    finally:
        job_scheduler.shutdown(wait=False)
        connection.disconnect()
        logger.info("Market monitor stopped")


app = FastAPI(
    title="Market Monitor API",
    description="Market breadth statistics, price alerts and chart objects",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

for router in (health.router, statistics.router, price_alerts.router, chart_objects.router, quotes.router):
    app.include_router(router)
