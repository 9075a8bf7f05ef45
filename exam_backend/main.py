import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from exam_backend.config import Settings, settings as default_settings
from exam_backend.database import JsonStore
from exam_backend.exceptions import ExamError, StorageError
from exam_backend.routers import router

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


async def exam_error_handler(request: Request, exc: ExamError):
    if isinstance(exc, StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc.message, exc_info=exc)
        return JSONResponse(status_code=exc.status_code, content={"error": INTERNAL_ERROR})
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies get the same answer as missing fields
    message = "Invalid test" if request.url.path.startswith("/api/admin/test") else "Invalid data"
    logger.info("Rejected body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": message})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        db = JsonStore(settings.data_dir)
        db.ensure_initialized()
        app.state.db = db
        logger.info("%s using data directory %s", settings.app_name, db.base_dir)
        yield

    app = FastAPI(
        title=settings.app_name,
        description="Exam taking API: student registration, tests, submissions and results",
        version=settings.api_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(ExamError, exam_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)
