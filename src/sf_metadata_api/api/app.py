import logging
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from sf_metadata_api.api.middleware import internal_error_response, security_headers_middleware
from sf_metadata_api.api.schemas import CreateMetadataResponse, ErrorResponse, HealthResponse
from sf_metadata_api.config import Settings, get_settings
from sf_metadata_api.errors import DefinitionValidationError, MetadataError
from sf_metadata_api.service.metadata import MetadataService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Endpoint not found"


async def handle_metadata_error(request: Request, exc: MetadataError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("request.failed path=%s error=%s message=%s", request.url.path, exc.error, exc.message)
    else:
        logger.warning("request.rejected path=%s message=%s", request.url.path, exc.message)
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # The static mount answers every unmatched path, so its 405 for non-GET methods means no such endpoint.
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"error": "Not Found", "message": NOT_FOUND_MESSAGE})
    content = {"error": _reason_phrase(exc.status_code), "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def handle_unknown_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.crashed path=%s", request.url.path)
    return internal_error_response()


def _reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def create_app(settings: Settings | None = None, service: MetadataService | None = None) -> FastAPI:
    settings = settings or get_settings()
    metadata_service = service or MetadataService(settings)

    app = FastAPI(title="sf-metadata-api", version="0.1.0")
    app.state.metadata_service = metadata_service

    app.middleware("http")(security_headers_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(MetadataError, handle_metadata_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unknown_error)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="OK", message="Salesforce Metadata API is running")

    @app.post(
        "/create-metadata",
        response_model=CreateMetadataResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def create_metadata(request: Request) -> dict:
        try:
            payload = await request.json()
        except ValueError as exc:
            raise DefinitionValidationError("Request body must be valid JSON") from exc
        return await request.app.state.metadata_service.create_metadata(payload)

    app.mount("/", StaticFiles(directory=settings.static_dir, check_dir=False), name="static")
    return app


app = create_app()


def main() -> None:
    settings = get_settings()
    logger.info("Salesforce Metadata API server running at http://localhost:%d", settings.port)
    logger.info("Health check: http://localhost:%d/health", settings.port)
    logger.info("Create metadata: POST http://localhost:%d/create-metadata", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
