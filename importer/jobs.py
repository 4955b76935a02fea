from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel

from importer.schemas.site import ScrapeResult


class JobStatus(StrEnum):
    pending = "pending"
    running = "running"
    completed = "completed"
    failed = "failed"


class Job(BaseModel):
    job_id: str
    status: JobStatus
    url: str
    created_at: datetime
    finished_at: datetime | None = None
    result: ScrapeResult | None = None
    error: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.status in (JobStatus.completed, JobStatus.failed)


class JobStore:
    """In-memory registry of background scrape jobs, lost on restart.

    At most one pending/running job exists per URL. Beyond ``max_jobs`` the
    oldest finished jobs are dropped; active jobs are never evicted.
    """

    def __init__(self, max_jobs: int = 1000) -> None:
        self._jobs: dict[str, Job] = {}  # insertion order == creation order
        self._active_by_url: dict[str, str] = {}
        self._max_jobs = max_jobs

    def __len__(self) -> int:
        return len(self._jobs)

    def _evict(self) -> None:
        overflow = len(self._jobs) - self._max_jobs
        if overflow <= 0:
            return
        stale = [job_id for job_id, job in self._jobs.items() if job.is_finished][:overflow]
        for job_id in stale:
            del self._jobs[job_id]

    def create_job(self, url: str) -> Job:
        job = Job(
            job_id=uuid.uuid4().hex[:12],
            status=JobStatus.pending,
            url=url,
            created_at=datetime.now(timezone.utc),
        )
        self._jobs[job.job_id] = job
        self._active_by_url[url] = job.job_id
        self._evict()
        return job

    def get_job(self, job_id: str) -> Job | None:
        return self._jobs.get(job_id)

    def has_active_job(self, url: str) -> Job | None:
        """The pending or running job already scraping *url*, if any."""
        job_id = self._active_by_url.get(url)
        return self._jobs.get(job_id) if job_id else None

    def mark_running(self, job_id: str) -> None:
        job = self._jobs.get(job_id)
        if job is not None and not job.is_finished:
            job.status = JobStatus.running

    def _finish(self, job_id: str, status: JobStatus, **fields) -> None:
        job = self._jobs.get(job_id)
        if job is None:
            return
        job.status = status
        job.finished_at = datetime.now(timezone.utc)
        for name, value in fields.items():
            setattr(job, name, value)
        if self._active_by_url.get(job.url) == job_id:
            del self._active_by_url[job.url]

    def mark_completed(self, job_id: str, result: ScrapeResult) -> None:
        self._finish(job_id, JobStatus.completed, result=result)

    def mark_failed(self, job_id: str, error: str, result: ScrapeResult | None = None) -> None:
        self._finish(job_id, JobStatus.failed, error=error, result=result)
