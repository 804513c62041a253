"""
SmartRide FastAPI app.

HTTP layer over the fare engine, ride lifecycle and tracking use cases.
Maps the domain error taxonomy to status codes; no business logic here.
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartride.api.router import router
from smartride.application.config import Settings, load_settings
from smartride.application.services import Services, build_services
from smartride.domain.errors import RideError

logger = logging.getLogger("smartride.api")

STATUS_BY_KIND = {
    "validation": 400,
    "permission": 403,
    "not_found": 404,
    "conflict": 409,
    "internal": 500,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
    )


async def ride_error_handler(request: Request, exc: RideError) -> JSONResponse:
    status = STATUS_BY_KIND.get(exc.kind, 500)
    body = {"message": exc.message, "kind": exc.kind}
    field = getattr(exc, "field", None)
    if field:
        body["field"] = field
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=body)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """First pydantic error as {"message", "field"}, status 400."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    return JSONResponse(
        status_code=400,
        content={
            "message": first.get("msg", "Invalid request"),
            "kind": "validation",
            "field": ".".join(loc) or None,
        },
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error", "kind": "internal"})


def create_app(settings: Optional[Settings] = None, services: Optional[Services] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="SmartRide API",
        description="Fare quotes, ride lifecycle and live tracking",
        version="1.0.0",
    )
    app.state.services = services or build_services(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info("%s %s %s in %.0fms", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    app.add_exception_handler(RideError, ride_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(router)

    @app.get("/")
    def root():
        """Endpoint raíz"""
        return {"message": "SmartRide API", "status": "ok"}

    return app


app = create_app()


# Bloque para ejecutar con uvicorn
if __name__ == "__main__":
    import uvicorn

    _settings = load_settings()
    uvicorn.run(app, host=_settings.host, port=_settings.port)
