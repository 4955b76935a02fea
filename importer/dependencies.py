from typing import Annotated

from fastapi import Depends, Request

from importer.jobs import JobStore
from importer.services.scraper import ScraperService


def get_scraper_service(request: Request) -> ScraperService:
    return request.app.state.scraper_service


def get_job_store(request: Request) -> JobStore:
    return request.app.state.job_store


ScraperDep = Annotated[ScraperService, Depends(get_scraper_service)]
JobStoreDep = Annotated[JobStore, Depends(get_job_store)]
