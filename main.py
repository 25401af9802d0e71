from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
import time

from config.settings import settings
from core.exceptions import PersistenceError, ServiceError
from core.logger import setup_logging
from database.postgres import (
    check_database_health,
    close_all_connections,
    configure_mappers,
    get_connection_pool_status,
    init_db,
)
from utils.response import error_response

# Routers
from api.router.registration import registration_router
from api.router.review import review_router
from api.router.location import location_router
from api.router.promotion import promotion_router
from api.router.company import company_router
from api.router.business import business_router

setup_logging()
configure_mappers()

app = FastAPI(
    title="Business Review Service API",
    description="Business registration, review workflow, locations and promotions",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    response.headers["X-Process-Time"] = f"{time.perf_counter() - start_time:.4f}"
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if isinstance(exc, PersistenceError):
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return error_response(
        status_code=exc.status_code,
        message=exc.message,
        data={"code": exc.code, **exc.details} if exc.details else {"code": exc.code},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(part) for part in error["loc"] if part != "body"),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]
    message = "; ".join(f"{error['field']}: {error['message']}" for error in errors)
    return error_response(
        status_code=400,
        message=message or "Invalid request",
        data={"code": "VALIDATION_ERROR", "errors": errors},
    )


# Routers
app.include_router(registration_router, prefix="/api/v1")
app.include_router(review_router, prefix="/api/v1")
app.include_router(location_router, prefix="/api/v1")
app.include_router(promotion_router, prefix="/api/v1")
app.include_router(company_router, prefix="/api/v1")
app.include_router(business_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup():
    logger.info("=" * 60)
    logger.info("APPLICATION STARTING UP")
    logger.info("=" * 60)

    if settings.AUTO_CREATE_TABLES:
        init_db()

    db_health = check_database_health()
    if db_health.get("status") == "healthy":
        logger.info(f"✓ Database connected ({db_health.get('backend')})")
        logger.info(f"✓ Connection pool initialized: {get_connection_pool_status()}")
    else:
        # Keep serving so /health can report the failure
        logger.error(f"❌ Database unavailable at startup: {db_health.get('error')}")

    logger.info("APPLICATION READY")


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("Application shutting down...")
    close_all_connections()
    logger.info("Shutdown completed")


@app.get("/")
def read_root():
    """Root endpoint"""
    return {
        "name": "Business Review Service API",
        "version": "1.0.0",
        "status": "operational",
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint for load balancers

    Returns:
        dict: Health status
    """
    db_health = check_database_health()
    health = {
        "status": "healthy" if db_health.get("status") == "healthy" else "unhealthy",
        "timestamp": time.time(),
        "database": db_health.get("status", "unknown"),
    }
    status_code = 200 if health["status"] == "healthy" else 503
    return JSONResponse(content=health, status_code=status_code)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=settings.ENV == "development")
