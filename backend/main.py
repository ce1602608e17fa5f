"""
Newspaper - FastAPI Backend
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api import articles, comments, users
from config import get_settings
from services.exceptions import (
    ConcurrencyConflict,
    IdentityRequired,
    InvalidCredential,
    NewspaperError,
    NotFound,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(name)s] %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)

settings = get_settings()

# Status code per service error kind
ERROR_STATUS = {
    NotFound: status.HTTP_404_NOT_FOUND,
    IdentityRequired: status.HTTP_401_UNAUTHORIZED,
    InvalidCredential: status.HTTP_401_UNAUTHORIZED,
    ConcurrencyConflict: status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool and make sure the schema exists"""
    if settings.storage_backend == "postgres":
        from repositories import get_db_pool
        from repositories.schema import create_schema
        pool = await get_db_pool()
        await create_schema(pool)
        logger.info("✅ PostgreSQL storage ready")
        yield
        await pool.close()
    else:
        logger.info("⚠️  Running on in-memory storage, data is lost on restart")
        yield


app = FastAPI(
    title="Newspaper",
    description="Articles, comments, likes and a personalized feed",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for the newspaper frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NewspaperError)
async def newspaper_error_handler(request: Request, exc: NewspaperError):
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# API endpoints - all under /api/*
app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(users.router)


@app.get("/health")
async def health():
    return {"status": "ok"}


@app.get("/api/health")
async def api_health():
    return {"status": "ok", "service": "newspaper", "storage": settings.storage_backend}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
