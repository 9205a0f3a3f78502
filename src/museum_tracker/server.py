"""
HTTP surface for the museum tracker.

Exposes `POST /api/museum`, which runs the fetch-and-reconcile pipeline for
a player, and `GET /health`. The catalog is loaded once when the app is
created and shared read-only by every request.
"""

import logging

import uvicorn
from fastapi import Body, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from museum_tracker.catalog import Catalog, load_catalog
from museum_tracker.config import Settings, get_settings
from museum_tracker.exceptions import ProfileNotFoundError, UpstreamError
from museum_tracker.models import ErrorResponse, HealthResponse, MuseumRequest
from museum_tracker.service import MuseumService

log = logging.getLogger(__name__)

MISSING_FIELDS_ERROR = "uuid and apiKey are required"


def _error(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=details is None),
    )


def create_app(settings: Settings | None = None, catalog: Catalog | None = None) -> FastAPI:
    settings = settings or get_settings()
    if catalog is None:
        catalog = load_catalog(settings.data_dir)

    application = FastAPI(title="Museum Tracker", version="1.0.0")
    application.state.service = MuseumService(catalog, settings)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        log.warning("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
        return _error(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_ERROR)

    @application.get("/health")
    def health() -> JSONResponse:
        body = HealthResponse(
            catalog_source=catalog.source.value,
            catalog_categories=len(catalog.categories),
            catalog_items=catalog.item_count,
        )
        return JSONResponse(content=body.model_dump(by_alias=True))

    @application.post("/api/museum")
    def museum_progress(payload: MuseumRequest | None = Body(default=None)) -> JSONResponse:
        if payload is None or not payload.uuid or not payload.api_key:
            return _error(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_ERROR)

        service: MuseumService = application.state.service
        try:
            progress = service.get_progress(payload.uuid, payload.api_key)
        except UpstreamError as e:
            log.warning("%s for %s: %s", e.message, payload.uuid, e.details)
            return _error(status.HTTP_502_BAD_GATEWAY, e.message, e.details)
        except ProfileNotFoundError as e:
            log.info("%s", e)
            return _error(status.HTTP_404_NOT_FOUND, "No profiles found for this UUID")
        except Exception as e:
            log.exception("Unexpected error fetching museum for %s", payload.uuid)
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Unexpected server error", str(e))

        return JSONResponse(content=progress.model_dump(by_alias=True))

    log.debug("Application created with %s catalog", catalog.source.value)
    return application


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    log.info("Museum Tracker server running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
