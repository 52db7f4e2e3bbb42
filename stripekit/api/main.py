from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from stripekit.api.routes import health
from stripekit.api.routes.router import api_router
from stripekit.common.core.config import settings
from stripekit.common.core.exceptions import AppException
from stripekit.common.core.schemas import ErrorResponse
from stripekit.common.core.telemetry import get_logger
from stripekit.common.providers.rate_limiter.limiter import limiter
from stripekit.packages.licensing.models.schemas.licensing import ValidateKeyFailure

logger = get_logger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting StripeKit API...")
    if not settings.stripe_secret_key:
        logger.warning("STRIPE_SECRET_KEY is not set; billing endpoints will fail")
    if not settings.stripe_webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET is not set; webhooks will be rejected")
    yield
    # Shutdown
    logger.info("Shutting down StripeKit API...")


app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    """Failures raised outside a route's own handling, e.g. an unconfigured provider."""
    logger.error(
        f"Unhandled application error: {exc.message}",
        extra={"path": request.url.path, "kind": exc.kind.value},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Missing, malformed or mistyped JSON bodies are a 400 in the route's own shape."""
    logger.info(
        "Rejected invalid request body",
        extra={"path": request.url.path, "errors": len(exc.errors())},
    )
    if request.url.path == "/api/validate-key":
        body = ValidateKeyFailure(error=INVALID_BODY_MESSAGE)
    else:
        body = ErrorResponse(error=INVALID_BODY_MESSAGE)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump()
    )


# Instrument FastAPI with OpenTelemetry
FastAPIInstrumentor.instrument_app(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(api_router, prefix="/api")


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
