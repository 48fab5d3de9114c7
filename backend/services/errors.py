"""Error taxonomy for the analysis pipeline.

Every error carries a stable ``code`` and a ``user_message`` that is safe to
return to clients. ``retryable`` tells the request pipeline whether a fresh
model call may succeed.
"""

GENERIC_UNAVAILABLE = "AI analysis service temporarily unavailable. Please try again in a few moments."


class AnalysisError(RuntimeError):
    code: str = "AI_ERROR"
    user_message: str = GENERIC_UNAVAILABLE
    retryable: bool = False

    def __init__(self, message: str = "", *, code: str | None = None, user_message: str | None = None):
        super().__init__(message or self.__class__.__name__)
        if code is not None:
            self.code = code
        if user_message is not None:
            self.user_message = user_message


# --- Input / policy (terminal) ---


class InputError(AnalysisError):
    code = "INVALID_INPUT"
    user_message = "Invalid resume content provided"


class SecurityRejected(AnalysisError):
    code = "SECURITY_ERROR"
    user_message = "Content flagged for security review"

    def __init__(self, score: int, flags: list[str]):
        super().__init__(f"suspicion score {score} over block threshold")
        self.score = score
        self.flags = flags


class RateLimitExceeded(AnalysisError):
    code = "RATE_LIMITED"
    user_message = "Hourly request limit exceeded. Please try again later."


# --- External call ---


class RequestTimeout(AnalysisError):
    code = "TIMEOUT"
    user_message = "Analysis request timed out. Please try again with a shorter resume."
    retryable = True


class UpstreamError(AnalysisError):
    code = "SERVICE_ERROR"
    retryable = True


class EmptyResponse(UpstreamError):
    pass


class ResponseTooLarge(UpstreamError):
    code = "RESPONSE_ERROR"


class ServiceUnavailable(UpstreamError):
    pass


class UpstreamRateLimited(UpstreamError):
    code = "QUOTA_ERROR"


class UpstreamAuthError(UpstreamError):
    code = "AUTH_ERROR"
    retryable = False


class InvalidUpstreamRequest(UpstreamError):
    code = "REQUEST_ERROR"
    retryable = False


# --- Parsing / validation (retried with a fresh call) ---


class NoStructureFound(AnalysisError):
    code = "PARSING_ERROR"
    user_message = "Could not parse AI response format"
    retryable = True


class MalformedStructure(AnalysisError):
    code = "PARSING_ERROR"
    user_message = "AI response contains malformed data"
    retryable = True


class SchemaViolation(AnalysisError):
    """Raised once per failed validation rule; ``code`` names the rule."""

    user_message = "AI response format is invalid"
    retryable = True

    def __init__(self, code: str, message: str = ""):
        super().__init__(message or code, code=code)


# --- Internal ---


class AssemblyInvariantViolation(AnalysisError):
    code = "INTERNAL_ERROR"
    user_message = "An unexpected error occurred while analyzing your resume."


class StoreError(RuntimeError):
    pass


class DecodeError(ValueError):
    def __init__(self, message: str, *, code: str = "FILE_PROCESSING_ERROR"):
        super().__init__(message)
        self.code = code
