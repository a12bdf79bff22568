from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles

from .config import Settings, load_settings
from .core.gold_price import GoldPriceOracle
from .core.listing import ListingService
from .errors import StorefrontError
from .routers import products
from .schemas import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message).model_dump(by_alias=True)
    return JSONResponse(status_code=status_code, content=body)


def _iso_now() -> str:
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StorefrontError)
    async def storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Error serving %s %s: %s", request.method, request.url.path, exc)
        return _error(exc.status_code, exc.public_message)

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        return _error(400, "Invalid request parameters: " + ", ".join(fields))

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error serving %s %s", request.method, request.url.path)
        return _error(500, StorefrontError.public_message)


def create_app(settings: Optional[Settings] = None, oracle: Optional[GoldPriceOracle] = None) -> FastAPI:
    """Build the API with its own gold price oracle and listing service."""
    settings = settings or load_settings()
    oracle = oracle or GoldPriceOracle(
        settings.gold_price_url,
        fallback=settings.gold_price_fallback,
        ttl=settings.gold_price_ttl,
        timeout=settings.gold_price_timeout,
    )

    app = FastAPI(title="Jewelry Storefront API", version="1.0.0")
    app.state.settings = settings
    app.state.price_oracle = oracle
    app.state.listing_service = ListingService(settings.catalog_path, oracle)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(products.router, tags=["products"])
    # the bundled frontend calls the /api-prefixed paths
    app.include_router(products.router, prefix="/api", include_in_schema=False)

    @app.get("/health", response_model=HealthResponse)
    @app.get("/api/health", response_model=HealthResponse, include_in_schema=False)
    def healthcheck() -> HealthResponse:
        """Liveness probe for orchestration and tests."""
        return HealthResponse(timestamp=_iso_now())

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    if settings.public_dir and settings.public_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.public_dir, html=True), name="frontend")
    else:

        @app.get("/")
        def root() -> dict:
            return {
                "message": "Jewelry Storefront API is running. Visit /docs for the OpenAPI UI.",
                "products": "/products",
                "health": "/health",
            }

    _register_error_handlers(app)
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = app.state.settings
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    logger.info("Server running on port %s", settings.port)
    logger.info("API: http://localhost:%s/products", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
