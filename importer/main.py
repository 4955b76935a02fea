import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from importer.config import Settings
from importer.exceptions.custom import FetchError, InvalidUrlError
from importer.exceptions.handlers import fetch_error_handler, invalid_url_error_handler
from importer.jobs import JobStore
from importer.routers.health import router as health_router
from importer.routers.scrape import router as scrape_router
from importer.services.fetcher import reject_internal_hosts
from importer.services.renderer import PlaywrightRenderer
from importer.services.scraper import ScraperService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    # Re-check every outbound hop so a redirect cannot reach an internal host
    async with httpx.AsyncClient(
        timeout=settings.scrape_timeout_ms / 1000,
        event_hooks={"request": [reject_internal_hosts]},
    ) as client:
        renderer = PlaywrightRenderer() if settings.headless_enabled else None
        app.state.scraper_service = ScraperService.from_settings(client, settings, renderer=renderer)
        app.state.job_store = JobStore(max_jobs=settings.max_jobs)

        yield


app = FastAPI(title="Site Importer", lifespan=lifespan)

app.add_exception_handler(InvalidUrlError, invalid_url_error_handler)
app.add_exception_handler(FetchError, fetch_error_handler)

app.include_router(scrape_router)
app.include_router(health_router)
