import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.routers import auth, business, jobs, payments, pricing

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create/migrate the database, load the catalog, expire stale listings
    try:
        from app.database import SessionLocal, init_db
        from app.seed import seed_products
        from app.services.job_posting_service import JobPostingService
        from app.utils.filesystem import ensure_data_dir

        ensure_data_dir()
        init_db()
        db = SessionLocal()
        try:
            if settings.seed_catalog_on_startup:
                seed_products(db)
            JobPostingService(db).expire_overdue()
        finally:
            db.close()
        logger.info("Database ready at %s", settings.db_path)
    except Exception as exc:
        logger.error("Could not run startup database setup: %s", exc)
    yield


app = FastAPI(
    title="Job Board",
    description="Job board marketplace: tiered listing plans, add-ons and pricing",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(pricing.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(business.router, prefix=settings.api_prefix)
app.include_router(payments.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


def run():
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)
