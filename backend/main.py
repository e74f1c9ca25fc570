import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from db.base import Base
from db.session import SessionLocal
from routers.charts import router as charts_router
from routers.transactions import router as transactions_router
from services.seed_service import initialize_transactions, seed_enabled

# --------------------------------------------------
# LOGGING
# --------------------------------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    origins = [item.strip() for item in raw.split(",") if item.strip()]
    return origins or ["*"]


# --------------------------------------------------
# DB INIT
# --------------------------------------------------
def _init_db(session_factory: sessionmaker, seed: bool) -> None:
    try:
        with session_factory() as db:
            Base.metadata.create_all(bind=db.get_bind())
    except SQLAlchemyError:
        logger.exception("DB init failed")
        return

    if not seed:
        return

    db = session_factory()
    try:
        initialize_transactions(db)
    except Exception:
        db.rollback()
        logger.exception("Error initializing database")
    finally:
        db.close()


def create_app(
    session_factory: sessionmaker | None = None,
    seed_on_startup: bool | None = None,
) -> FastAPI:
    """
    Build the dashboard API.

    session_factory overrides the module-level SessionLocal (tests pass a
    SQLite-backed factory); seed_on_startup overrides SEED_ON_STARTUP.
    """
    factory = session_factory or SessionLocal
    seed = seed_enabled() if seed_on_startup is None else seed_on_startup

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await run_in_threadpool(_init_db, factory, seed)
        yield

    app = FastAPI(
        title="Product Transactions API",
        version="1.0.0",
        lifespan=lifespan,
        swagger_ui_parameters={
            "displayRequestDuration": True,
        },
    )
    app.state.session_factory = factory

    # --------------------------------------------------
    # CORS
    # --------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(),
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # --------------------------------------------------
    # ERRORS
    # --------------------------------------------------
    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store query failed path=%s", request.url.path)
        message = str(getattr(exc, "orig", None) or exc)
        return JSONResponse(status_code=500, content={"error": message})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        return JSONResponse(
            status_code=422,
            content={"error": first.get("msg", "Invalid request")},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error path=%s", request.url.path)
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # --------------------------------------------------
    # ROUTERS
    # --------------------------------------------------
    app.include_router(transactions_router)
    app.include_router(charts_router)

    # --------------------------------------------------
    # HEALTH CHECK
    # --------------------------------------------------
    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/")
    def root():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        log_level="info",
    )
