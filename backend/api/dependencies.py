"""Shared dependencies for API routes."""

from fastapi import Request

from services.request_pipeline import RequestPipeline
from services.resume_store import ResumeStore


def get_pipeline(request: Request) -> RequestPipeline:
    return request.app.state.pipeline


def get_store(request: Request) -> ResumeStore:
    return request.app.state.store
