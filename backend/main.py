from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.router import limiter, router
from config import settings
from logging_config import configure_logging
from services.gemini_client import GeminiClient
from services.request_pipeline import RequestPipeline
from services.resume_store import InMemoryResumeStore

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.pipeline = RequestPipeline(GeminiClient())
    app.state.store = InMemoryResumeStore()
    yield


app = FastAPI(
    title="Resume Roast API",
    description="AI-powered resume roasting and structured extraction",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
