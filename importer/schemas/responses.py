from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from importer.schemas.site import ScrapeOptions, ScrapeResult


class ImportScrapeOptions(BaseModel):
    """Caller-tunable subset of ScrapeOptions, bounded for the public API."""

    timeout: int = Field(default=30000, ge=5000, le=60000)  # milliseconds
    maxPages: int = Field(default=1, ge=1, le=10)
    followLinks: bool = False

    def to_scrape_options(self) -> ScrapeOptions:
        return ScrapeOptions(timeout=self.timeout, maxPages=self.maxPages, followLinks=self.followLinks)


class ImportScrapeRequest(BaseModel):
    url: str = Field(min_length=1)
    options: ImportScrapeOptions = Field(default_factory=ImportScrapeOptions)


class ScrapeFailedResponse(BaseModel):
    detail: str
    errors: list[str]


class JobSubmittedResponse(BaseModel):
    job_id: str
    status: str
    message: str


class JobStatusResponse(BaseModel):
    job_id: str
    status: str
    url: str
    created_at: datetime
    finished_at: datetime | None = None
    result: ScrapeResult | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
