from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from app.config import settings
from app.services.cache import cache_service
from app.database import init_db
from app.routes import auth, categories, sliders, subcategories

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting content API...")
    logger.info(f"Order base: {settings.order_base}, strict two-level categories: {settings.enforce_two_level_categories}")

    try:
        await init_db()
        logger.info("Database initialized")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")

    await cache_service.connect()

    yield

    logger.info("Shutting down...")
    await cache_service.disconnect()


app = FastAPI(
    title="Kurumsal Content API",
    description="Categories and homepage sliders for the marketing site",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(sliders.router)
app.include_router(subcategories.router)


@app.get("/api/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "cache": cache_service.redis_client is not None
    }
