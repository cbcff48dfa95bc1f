from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool
from app.core.config import settings
from app.core.errors import register_error_handlers
from app.api import bookings, payments, testimonials
from app.api.dependencies import get_store
from app.core.logger import setup_logging, logger
from app.services.db_service import Store
from contextlib import asynccontextmanager
from datetime import datetime

setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"🚀 Starting {settings.PROJECT_NAME} on port {settings.PORT}")
    store = app.dependency_overrides.get(get_store, get_store)()

    if await store.ping():
        logger.info(f"✅ Connected to the {settings.DB_BACKEND} database")
        if settings.DB_AUTO_CREATE and hasattr(store, "create_schema"):
            try:
                await run_in_threadpool(store.create_schema)
            except SQLAlchemyError as e:
                logger.error(f"❌ Schema creation failed: {e}")
    else:
        # Keep serving, requests will answer 500 until the database is back
        logger.error("❌ Could not connect to the database. Check DB_* settings and that the server is running.")
    yield
    # Shutdown
    logger.info("🛑 Shutting down backend")

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(bookings.router, tags=["Bookings"])
app.include_router(payments.router, prefix="/api", tags=["Payments"])
app.include_router(testimonials.router, prefix="/api", tags=["Testimonials"])

@app.get("/")
async def health_check():
    return {'status': 'active', 'time': datetime.now().isoformat()}

@app.get("/health")
async def health_check_std(store: Store = Depends(get_store)):
    database = "ok" if await store.ping() else "unreachable"
    return {"status": "ok", "environment": settings.ENVIRONMENT, "database": database, "timestamp": datetime.now().isoformat()}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.ENVIRONMENT == "development")
