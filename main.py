from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cardmatch.api.v1 import router as v1_endpoint
from cardmatch.config import get_settings
from cardmatch.utils.logger import api_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    if not settings.supabase_url or not settings.supabase_service_key:
        api_logger.warning(
            "SUPABASE_URL / SUPABASE_SERVICE_KEY not set, catalog matching will return no_match"
        )
    api_logger.info(
        f"Card matcher ready (candidate limit={settings.catalog_candidate_limit})"
    )
    yield
    api_logger.info("Card matcher shutting down")


app = FastAPI(
    title="API",
    description="Sports card detection and matching API",
    version="1.0.0",
    lifespan=lifespan,
)

origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(v1_endpoint, prefix="/api/v1", tags=["API Version 1"])


@app.get("/", tags=["Root"])
def read_root():
    return {"status": "ok", "message": "Welcome to the card matcher API!"}


@app.get("/health", tags=["Health"])
def health_check():
    """Health check endpoint for monitoring"""
    return {"status": "healthy", "message": "Card matcher API is running", "version": "1.0.0"}


# To run this application for development:
# uvicorn main:app --reload
