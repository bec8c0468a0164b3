from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from larder.api.routes import pantry, plan, recipes, shopping, stores
from larder.events.web_observers import start as start_event_observers
from larder.infra.database import PersistenceError
from larder.utilities.config import DEBUG

# Logging
logger = logging.getLogger("larder_app")

# Initialize FastAPI app
app = FastAPI(title="Larder: Meal Plan Shopping List API", debug=DEBUG)

# Include routers
app.include_router(shopping.router)
app.include_router(pantry.router)
app.include_router(recipes.router)
app.include_router(plan.router)
app.include_router(stores.router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg", "invalid value")
    else:
        message = "Invalid request"
    logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
    return _error(400, message)


@app.exception_handler(ValueError)
async def _value_error(request: Request, exc: ValueError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


@app.exception_handler(PersistenceError)
async def _persistence_error(request: Request, exc: PersistenceError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(500, f"Storage unavailable: {exc}")


@app.exception_handler(StarletteHTTPException)
async def _http_error(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.get("/api/health")
def health():
    return {"ok": True}
