import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    temperature: float = 0.6
    max_output_tokens: int = 4096

    # Request pipeline policy
    request_timeout_s: float = 45.0
    max_attempts: int = 3
    retry_base_delay_s: float = 2.0
    min_request_interval_s: float = 1.0
    hourly_request_limit: int = 100
    max_response_chars: int = 50000

    # Input bounds
    min_text_chars: int = 50
    max_text_chars: int = 50000
    max_prompt_chars: int = 8000
    max_upload_size_mb: int = 5

    # Security screening
    security_block_threshold: int = 8
    security_warn_threshold: int = 5

    data_retention_days: int = 90

    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
