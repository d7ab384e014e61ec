from contextlib import asynccontextmanager
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from paper_review.api.http import auth_router, health_router, moderators_router, papers_router
from paper_review.core.config import Settings
from paper_review.core.db import create_engine, create_sessionmaker, init_models
from paper_review.core.errors import ServiceError
from paper_review.core.logging import setup_logging
from paper_review.storage import build_blob_store

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            field = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
            message = f"{field}: {errors[0]['msg']}" if field else errors[0]["msg"]
        else:
            message = "Invalid request."
        return JSONResponse(status_code=400, content={"detail": message})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Database error."})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Сборка приложения.

    Движок БД и хранилище файлов создаются здесь, лежат в ``app.state``
    и живут до остановки процесса.
    """
    settings = settings or Settings()
    setup_logging(settings.log_level, settings.log_format)

    engine = create_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_models(engine)
        logger.info(f"Paper review API started with {settings.storage_backend} storage")
        yield
        await engine.dispose()

    app = FastAPI(
        title="Paper Review",
        description="Назначение работ модераторам и управление файлами работ",
        version="1.0.0",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    app.state.blob_store = build_blob_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Подключаем роутеры
    api_prefix = settings.api_prefix.rstrip("/")
    app.include_router(health_router)
    app.include_router(auth_router, prefix=api_prefix)
    app.include_router(moderators_router, prefix=api_prefix)
    app.include_router(papers_router, prefix=api_prefix)

    # Раздаём локальные файлы; для S3 ссылки ведут прямо в хранилище
    if settings.storage_backend == "local":
        os.makedirs(settings.upload_dir, exist_ok=True)
        app.mount(
            settings.uploads_url_prefix,
            StaticFiles(directory=settings.upload_dir),
            name="uploads"
        )

    return app
