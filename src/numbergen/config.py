from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://localhost:27017/numbergen"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3100
    debug: bool = False
    cors_origins: list[str] = []
    timezone: str = "UTC"  # IANA zone used for {YEAR}/{MONTH}/{DAY} and reset windows
    transaction_max_retries: int = 100  # Optimistic write attempts per tenant transaction
    transaction_retry_delay: float = 0.005  # Base backoff in seconds, grows with each conflict
    # Build metadata injected during Docker build via environment variables
    git_commit_hash: str = "unknown"
    git_commit_date: str = "unknown"
    build_time: str = "unknown"

    model_config = {
        "env_file": [".env"],
        "env_prefix": "NUMBERGEN_",
        "extra": "ignore",
    }
