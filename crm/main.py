from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from crm.api import customers, dashboard, employees, inventory, orders, quotes, schedules
from crm.core.config import settings
from crm.core.redis import init_redis, close_redis, get_redis
from crm.core.metrics import request_count, request_duration, db_connected, redis_connected, get_metrics_text
from crm.db.session import get_db, init_models, ping_db
import time
import logging

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        
        try:
            response = await call_next(request)
        except Exception:
            duration = time.time() - start_time
            request_count.labels(
                method=request.method,
                endpoint=request.url.path,
                status=500
            ).inc()
            request_duration.labels(
                method=request.method,
                endpoint=request.url.path
            ).observe(duration)
            raise

        duration = time.time() - start_time
        request_count.labels(
            method=request.method,
            endpoint=request.url.path,
            status=response.status_code
        ).inc()
        request_duration.labels(
            method=request.method,
            endpoint=request.url.path
        ).observe(duration)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("Application starting...")
    
    try:
        await init_redis()
        redis_connected.set(1 if get_redis() is not None else 0)
    except Exception as e:
        logger.error(f"Redis connection failed: {e}")
        redis_connected.set(0)
    
    try:
        await init_models()
        db_connected.set(1)
        logger.info("Database connected")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        db_connected.set(0)
    
    yield
    
    logger.info("Application shutting down...")
    await close_redis()
    redis_connected.set(0)
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    debug=settings.DEBUG,
    lifespan=lifespan
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Idempotency-Key"],
)

app.include_router(customers.router)
app.include_router(inventory.router)
app.include_router(orders.router)
app.include_router(employees.router)
app.include_router(quotes.router)
app.include_router(schedules.router)
app.include_router(dashboard.router)


@app.get("/metrics", tags=["monitoring"])
async def metrics():
    return Response(
        content=get_metrics_text(),
        media_type="text/plain; version=0.0.4; charset=utf-8"
    )


@app.get("/health", tags=["monitoring"])
async def health_check(db: AsyncSession = Depends(get_db)):
    return {
        "status": "healthy",
        "service": settings.API_TITLE,
        "version": settings.API_VERSION,
        "dependencies": {
            "redis": "connected" if get_redis() is not None else "disabled",
            "database": "connected" if await ping_db(db) else "disconnected"
        }
    }


@app.get("/readiness", tags=["monitoring"])
async def readiness_check(db: AsyncSession = Depends(get_db)):
    db_ready = await ping_db(db)
    db_connected.set(1 if db_ready else 0)

    if not db_ready:
        return JSONResponse(
            status_code=503,
            content={"ready": False, "reason": "Database not available"}
        )
    
    return {
        "ready": True,
        "service": settings.API_TITLE
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": settings.API_TITLE,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/health",
        "metrics": "/metrics"
    }


def run():
    import uvicorn

    configure_logging()
    uvicorn.run("crm.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
