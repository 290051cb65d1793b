import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from calendar_backend.config import (
    API_PREFIX,
    CORS_ORIGINS,
    CORS_ORIGIN_REGEX,
    ENVIRONMENT,
    FRONTEND_DIST,
    IS_DEVELOPMENT,
    PORT,
)
from calendar_backend.database import SessionLocal, check_connection, init_db
from calendar_backend.routes.event_routes import router as event_router
from calendar_backend.routes.goal_routes import router as goal_router
from calendar_backend.routes.task_routes import router as task_router
from calendar_backend.services.categories import event_categories
from calendar_backend.services.event_service import EventService
from calendar_backend.services.goal_service import GoalService
from calendar_backend.services.task_service import TaskService

logger = logging.getLogger(__name__)

_LOCATION_PARTS = ("body", "query", "path")


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db()
    except Exception as e:
        # The API still starts; /api/health reports the database as unreachable
        logger.error(f"Database init failed: {e}")
    yield


app = FastAPI(title="Calendar API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ORIGIN_REGEX or None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Origin", "X-Requested-With", "Accept"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path} - Origin: {request.headers.get('origin', 'unknown')}")
    return await call_next(request)


# --- Error envelopes: {success: false, error: <string | string[]>} ---

def _validation_message(error: dict) -> str:
    msg = error.get("msg", "Invalid value")
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PARTS]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [_validation_message(e) for e in exc.errors()]
    logger.warning(f"Validation failed for {request.method} {request.url.path}: {messages}")
    return JSONResponse(status_code=400, content={"success": False, "error": messages})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"success": False, "error": "Server Error"}
    if IS_DEVELOPMENT:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)


app.include_router(event_router)
app.include_router(goal_router)
app.include_router(task_router)


@app.get(f"{API_PREFIX}/health")
async def health():
    return {"status": "ok", "databaseConnected": check_connection(), "environment": ENVIRONMENT}


@app.get(f"{API_PREFIX}/categories")
async def list_categories():
    categories = event_categories()
    return {"success": True, "count": len(categories), "data": categories}


@app.get(f"{API_PREFIX}/debug/status")
async def debug_status():
    db = SessionLocal()
    try:
        counts = {
            "events": EventService.count(db),
            "goals": GoalService.count(db),
            "tasks": TaskService.count(db),
        }
    finally:
        db.close()
    return {"success": True, "environment": ENVIRONMENT, "databaseConnected": True, "data": counts}


index_file = os.path.join(FRONTEND_DIST, "index.html")

if os.path.exists(index_file):
    logger.info("Frontend build directory found, serving static files")
    assets_dir = os.path.join(FRONTEND_DIST, "assets")
    if os.path.exists(assets_dir):
        app.mount("/assets", StaticFiles(directory=assets_dir), name="assets")

    # Serve index.html for SPA rules
    @app.get("/{full_path:path}")
    async def serve_spa(full_path: str):
        if full_path.startswith(API_PREFIX.strip("/")):
            return JSONResponse(status_code=404, content={"success": False, "error": "Endpoint not found"})
        root = os.path.realpath(FRONTEND_DIST)
        candidate = os.path.realpath(os.path.join(root, full_path))
        if full_path and candidate.startswith(root + os.sep) and os.path.isfile(candidate):
            return FileResponse(candidate)
        return FileResponse(index_file)
else:
    logger.info("Frontend build directory not found, running in API-only mode")

    @app.get("/")
    async def root():
        return {
            "message": "Calendar API is running",
            "endpoints": {
                "events": f"{API_PREFIX}/events",
                "goals": f"{API_PREFIX}/goals",
                "tasks": f"{API_PREFIX}/tasks",
                "categories": f"{API_PREFIX}/categories",
            },
        }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("calendar_backend.main:app", host="0.0.0.0", port=PORT, reload=IS_DEVELOPMENT)
