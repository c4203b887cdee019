"""Main application entry point for the MapEstate API."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import settings
from security import get_signing_secret
from routers import auth, properties, currency, favorites, inquiries

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # a missing production secret stops startup
    get_signing_secret()
    yield


app = FastAPI(title="MapEstate API", lifespan=lifespan)

app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(currency.router)
app.include_router(favorites.router)
app.include_router(inquiries.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Renders every HTTP error as ``{"message": ...}``."""
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "API endpoint not found"
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed input is a 400 that lists each offending field."""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({
            "field": ".".join(loc),
            "message": str(err.get("msg")),
        })

    expected = ", ".join(error["field"] for error in errors if error["field"])
    return JSONResponse(
        status_code=400,
        content={
            "message": f"Invalid or missing fields: {expected}" if expected else "Invalid request",
            "errors": errors,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/api/health", tags=["Health"])
def health():
    """Liveness probe."""
    return {"status": "OK", "message": "API is running"}
