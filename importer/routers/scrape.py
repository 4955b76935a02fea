import asyncio
import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from importer.dependencies import JobStoreDep, ScraperDep
from importer.jobs import JobStore
from importer.mappers.urls import validate_external_url
from importer.schemas.responses import (
    ImportScrapeRequest,
    JobStatusResponse,
    JobSubmittedResponse,
    ScrapeFailedResponse,
)
from importer.schemas.site import ScrapeOptions, ScrapeResult
from importer.services.scraper import ScraperService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])


async def _run_scrape(
    job_id: str,
    service: ScraperService,
    store: JobStore,
    url: str,
    options: ScrapeOptions,
) -> None:
    store.mark_running(job_id)
    try:
        result = await service.scrape(url, options)
    except Exception as exc:
        logger.exception("Scrape job %s failed", job_id)
        store.mark_failed(job_id, str(exc))
        return

    if result.success:
        store.mark_completed(job_id, result)
    else:
        store.mark_failed(job_id, result.errors[0] if result.errors else "Failed to scrape URL", result)


@router.post(
    "/scrape",
    response_model=ScrapeResult,
    responses={422: {"model": ScrapeFailedResponse}},
)
async def scrape_site(request: ImportScrapeRequest, service: ScraperDep) -> ScrapeResult:
    # InvalidUrlError propagates to the 400 handler
    url = validate_external_url(request.url)

    result = await service.scrape(url, request.options.to_scrape_options())
    if not result.success:
        return JSONResponse(
            status_code=422,
            content={"detail": "Failed to scrape URL", "errors": result.errors},
        )
    return result


@router.post("/scrape/jobs", response_model=JobSubmittedResponse, status_code=202)
async def submit_scrape_job(
    request: ImportScrapeRequest,
    service: ScraperDep,
    store: JobStoreDep,
) -> JobSubmittedResponse:
    url = validate_external_url(request.url)

    existing = store.has_active_job(url)
    if existing:
        return JSONResponse(
            status_code=202,
            content={
                "job_id": existing.job_id,
                "status": "already_running",
                "message": "A scrape job for this URL is already running",
            },
        )

    job = store.create_job(url)
    asyncio.create_task(_run_scrape(job.job_id, service, store, url, request.options.to_scrape_options()))
    return JobSubmittedResponse(
        job_id=job.job_id,
        status=job.status,
        message="Scrape job submitted",
    )


@router.get("/jobs/{job_id}", response_model=JobStatusResponse)
async def get_job_status(job_id: str, store: JobStoreDep) -> JobStatusResponse:
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobStatusResponse(**job.model_dump())
