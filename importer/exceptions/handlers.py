import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import FetchError, InvalidUrlError

logger = logging.getLogger(__name__)


async def invalid_url_error_handler(_request: Request, exc: InvalidUrlError) -> JSONResponse:
    logger.warning("Rejected URL: %s", exc.message)
    return JSONResponse(
        status_code=400,
        content={"detail": exc.message},
    )


async def fetch_error_handler(_request: Request, exc: FetchError) -> JSONResponse:
    logger.error("Fetch error: %s (status=%s)", exc.message, exc.status_code)
    return JSONResponse(
        status_code=502,
        content={"detail": f"Fetch error: {exc.message}"},
    )
