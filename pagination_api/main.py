from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pagination_api.core.config import settings
from pagination_api.core.middleware_correlation import CorrelationIdMiddleware
from pagination_api.core.logging import setup_logging
from pagination_api.core.errors import register_exception_handlers

# Routers
from pagination_api.api.routes.pagination import router as pagination_router


setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Pagination API - normalizes page/limit query parameters into page, limit and skip.",
    version="1.0.0",
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
)

# CORS middleware - allow docs UI to make API requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8000", "http://127.0.0.1:8000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(CorrelationIdMiddleware)


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    defaults = settings.pagination_defaults()
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": "1.0.0",
        "docs_url": "/docs",
        "redoc_url": "/redoc",
        "api_v1_str": settings.API_V1_STR,
        "endpoints": {
            "pagination": f"{settings.API_V1_STR}/pagination",
            "normalize": f"{settings.API_V1_STR}/pagination/normalize",
        },
        "defaults": defaults.model_dump(),
    }


register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_V1_STR)
api.include_router(pagination_router)
app.include_router(api)
