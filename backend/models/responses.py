from pydantic import BaseModel

from models.schemas.analysis_record import AnalysisRecord


class AnalysisResponse(BaseModel):
    success: bool
    record: AnalysisRecord | None = None
    error_code: str | None = None
    user_message: str | None = None
    request_id: str = ""


class RateLimitState(BaseModel):
    requests_this_hour: int = 0
    hourly_limit: int = 0
    min_request_interval_s: float = 0.0
    is_near_limit: bool = False


class HealthResponse(BaseModel):
    status: str = "ok"
    healthy: bool = True
    gemini_configured: bool = False
    request_count: int = 0
    success_count: int = 0
    error_count: int = 0
    retry_count: int = 0
    cancelled_count: int = 0
    error_rate: float = 0.0
    average_latency_ms: int = 0
    suspicious_requests: int = 0
    blocked_requests: int = 0
    rate_limit: RateLimitState = RateLimitState()
