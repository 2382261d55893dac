import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from trylocal.core.config import settings
from trylocal.core.errors import ExternalServiceError, TryLocalError
from trylocal.api.v1.api import router as api_v1_router
from trylocal.services.payments import get_payments_client
from trylocal.services.store import get_business_repository

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Try Local Gresham API", version="0.1.0")

# set up CORS so the web app can talk to us
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# mount our API routes
app.include_router(api_v1_router, prefix="/api/v1")


@app.exception_handler(TryLocalError)
async def handle_app_error(request: Request, exc: TryLocalError):
    if isinstance(exc, ExternalServiceError):
        # upstream text can leak keys or account details, log it and send the generic message
        logger.error(f"{request.method} {request.url.path} failed ({exc.category}): {exc.message}")
        message = exc.public_message
    else:
        message = exc.message
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def _component_health(name, factory):
    try:
        return factory().health_check()
    except ExternalServiceError as e:
        logger.warning(f"Health check for {name} failed: {e.message}")
        return {"status": "unavailable", "error": e.public_message}


@app.get("/health")
def health():
    components = {
        "payments": _component_health("payments", get_payments_client),
        "store": _component_health("store", get_business_repository),
    }
    healthy = all(c.get("status") != "unavailable" for c in components.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "degraded", "env": settings.APP_ENV, "components": components},
    )
