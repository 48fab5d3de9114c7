"""Resilient request cycle around the external model call.

One ``RequestPipeline`` is created at application start-up. It owns the only
shared mutable state in the analysis path: the rate limiter and the metrics
counters.
"""

import asyncio
import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable

from config import settings
from models.responses import HealthResponse, RateLimitState
from services.errors import (
    AnalysisError,
    EmptyResponse,
    RateLimitExceeded,
    RequestTimeout,
    ResponseTooLarge,
)
from services.gemini_client import LLMClient

logger = logging.getLogger(__name__)

HOUR_S = 3600.0
NEAR_LIMIT_RATIO = 0.8
HEALTHY_ERROR_RATE = 0.5


@dataclass(frozen=True)
class PipelinePolicy:
    timeout_s: float = 45.0
    max_attempts: int = 3
    retry_base_delay_s: float = 2.0
    min_interval_s: float = 1.0
    hourly_limit: int = 100
    max_response_chars: int = 50000

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    @classmethod
    def from_settings(cls) -> "PipelinePolicy":
        return cls(
            timeout_s=settings.request_timeout_s,
            max_attempts=settings.max_attempts,
            retry_base_delay_s=settings.retry_base_delay_s,
            min_interval_s=settings.min_request_interval_s,
            hourly_limit=settings.hourly_request_limit,
            max_response_chars=settings.max_response_chars,
        )

    def backoff_delay(self, retry: int) -> float:
        """Delay before retry number ``retry`` (0-based)."""
        return self.retry_base_delay_s * 2**retry


class PipelineMetrics:
    """Request counters, mutated only under a lock."""

    def __init__(self):
        self._lock = threading.Lock()
        self.request_count = 0
        self.success_count = 0
        self.error_count = 0
        self.retry_count = 0
        self.cancelled_count = 0
        self.total_latency_ms = 0
        self.suspicious_requests = 0
        self.blocked_requests = 0

    def record_request(self) -> None:
        with self._lock:
            self.request_count += 1

    def record_success(self, latency_ms: int) -> None:
        with self._lock:
            self.success_count += 1
            self.total_latency_ms += latency_ms

    def record_error(self) -> None:
        with self._lock:
            self.error_count += 1

    def record_retry(self) -> None:
        with self._lock:
            self.retry_count += 1

    def record_cancelled(self) -> None:
        with self._lock:
            self.cancelled_count += 1

    def record_suspicious(self) -> None:
        with self._lock:
            self.suspicious_requests += 1

    def record_blocked(self) -> None:
        with self._lock:
            self.blocked_requests += 1

    @property
    def average_latency_ms(self) -> int:
        with self._lock:
            if not self.success_count:
                return 0
            return round(self.total_latency_ms / self.success_count)

    @property
    def error_rate(self) -> float:
        with self._lock:
            finished = self.success_count + self.error_count
            return self.error_count / finished if finished else 0.0


class RateLimiter:
    """Minimum spacing between dispatches plus a rolling one-hour cap.

    Spacing makes callers wait; the hourly cap fails fast.
    """

    def __init__(self, min_interval_s: float, hourly_limit: int, clock: Callable[[], float] = time.monotonic):
        self.min_interval_s = min_interval_s
        self.hourly_limit = hourly_limit
        self._clock = clock
        self._lock = asyncio.Lock()
        self._admitted: deque[float] = deque()
        self._next_slot = 0.0

    def _evict(self, now: float) -> None:
        while self._admitted and now - self._admitted[0] >= HOUR_S:
            self._admitted.popleft()

    async def admit(self) -> None:
        """Count one logical request against the hourly cap."""
        async with self._lock:
            now = self._clock()
            self._evict(now)
            if len(self._admitted) >= self.hourly_limit:
                logger.warning(
                    "Hourly rate limit exceeded: %d/%d", len(self._admitted), self.hourly_limit
                )
                raise RateLimitExceeded(f"hourly limit of {self.hourly_limit} requests reached")
            self._admitted.append(now)

    async def wait_for_slot(self) -> None:
        """Reserve the next dispatch slot, then sleep until it arrives."""
        async with self._lock:
            now = self._clock()
            slot = max(now, self._next_slot)
            self._next_slot = slot + self.min_interval_s
        delay = slot - now
        if delay > 0:
            logger.debug("Rate limiting - waiting %.2fs before dispatch", delay)
            await asyncio.sleep(delay)

    def usage(self) -> int:
        self._evict(self._clock())
        return len(self._admitted)


@dataclass
class PipelineOutcome:
    payload: dict[str, Any]
    attempts: int
    retries: int
    latency_ms: int


class RequestPipeline:
    def __init__(
        self,
        client: LLMClient,
        policy: PipelinePolicy | None = None,
        limiter: RateLimiter | None = None,
        metrics: PipelineMetrics | None = None,
    ):
        self.client = client
        self.policy = policy or PipelinePolicy.from_settings()
        self.limiter = limiter or RateLimiter(self.policy.min_interval_s, self.policy.hourly_limit)
        self.metrics = metrics or PipelineMetrics()

    @property
    def model_name(self) -> str:
        return getattr(self.client, "model_name", "unknown")

    def _check_raw(self, raw: str | None) -> str:
        if raw is None or not raw.strip():
            raise EmptyResponse("Empty response from model")
        if len(raw) > self.policy.max_response_chars:
            raise ResponseTooLarge(f"Response of {len(raw)} chars exceeds {self.policy.max_response_chars}")
        return raw

    async def _attempt(self, prompt: str, process: Callable[[str], dict[str, Any]]) -> dict[str, Any]:
        await self.limiter.wait_for_slot()
        try:
            raw = await asyncio.wait_for(self.client.generate(prompt), timeout=self.policy.timeout_s)
        except asyncio.TimeoutError as e:
            raise RequestTimeout(f"No response within {self.policy.timeout_s}s") from e
        return process(self._check_raw(raw))

    async def run(
        self,
        prompt: str,
        process: Callable[[str], dict[str, Any]],
        request_id: str = "",
    ) -> PipelineOutcome:
        """Call the model until ``process`` accepts its output or attempts run out.

        ``process`` turns raw model text into a payload; retryable
        ``AnalysisError``s raised from it trigger a fresh model call.
        """
        self.metrics.record_request()
        started = time.monotonic()
        try:
            await self.limiter.admit()

            last_error: AnalysisError | None = None
            for attempt in range(1, self.policy.max_attempts + 1):
                if attempt > 1:
                    self.metrics.record_retry()
                    delay = self.policy.backoff_delay(attempt - 2)
                    logger.info(
                        "[%s] Retrying model request (%d/%d) in %.1fs",
                        request_id, attempt, self.policy.max_attempts, delay,
                    )
                    await asyncio.sleep(delay)

                try:
                    payload = await self._attempt(prompt, process)
                except AnalysisError as e:
                    if not e.retryable:
                        raise
                    last_error = e
                    logger.warning(
                        "[%s] Attempt %d/%d failed (%s): %s",
                        request_id, attempt, self.policy.max_attempts, e.code, e,
                    )
                    continue

                latency_ms = int((time.monotonic() - started) * 1000)
                self.metrics.record_success(latency_ms)
                logger.info(
                    "[%s] Model request succeeded after %d attempt(s) in %dms",
                    request_id, attempt, latency_ms,
                )
                return PipelineOutcome(
                    payload=payload, attempts=attempt, retries=attempt - 1, latency_ms=latency_ms
                )

            raise last_error

        except asyncio.CancelledError:
            self.metrics.record_cancelled()
            logger.info("[%s] Model request cancelled", request_id)
            raise
        except AnalysisError as e:
            self.metrics.record_error()
            logger.error("[%s] Model request failed (%s): %s", request_id, e.code, e)
            raise
        except Exception as e:
            self.metrics.record_error()
            logger.error("[%s] Unexpected model client error: %s", request_id, e)
            raise AnalysisError(f"Unexpected model client error: {e}") from e

    def health(self) -> HealthResponse:
        usage = self.limiter.usage()
        error_rate = self.metrics.error_rate
        return HealthResponse(
            healthy=error_rate < HEALTHY_ERROR_RATE,
            gemini_configured=bool(getattr(self.client, "configured", True)),
            request_count=self.metrics.request_count,
            success_count=self.metrics.success_count,
            error_count=self.metrics.error_count,
            retry_count=self.metrics.retry_count,
            cancelled_count=self.metrics.cancelled_count,
            error_rate=round(error_rate, 4),
            average_latency_ms=self.metrics.average_latency_ms,
            suspicious_requests=self.metrics.suspicious_requests,
            blocked_requests=self.metrics.blocked_requests,
            rate_limit=RateLimitState(
                requests_this_hour=usage,
                hourly_limit=self.limiter.hourly_limit,
                min_request_interval_s=self.limiter.min_interval_s,
                is_near_limit=usage > self.limiter.hourly_limit * NEAR_LIMIT_RATIO,
            ),
        )
