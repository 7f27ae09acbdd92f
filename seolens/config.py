from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    PROJECT_NAME: str = "SEOLens"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    LOG_LEVEL: str = "INFO"

    # HTML retrieval
    FETCH_TIMEOUT_SECONDS: float = 10.0
    FETCH_USER_AGENT: str = "SEOLensBot/0.1 (+https://seolens.dev/bot)"
    FETCH_MAX_REDIRECTS: int = 5

    # Report cache
    # Backend: "memory" for a process-scoped dict, "redis" for a shared store
    CACHE_BACKEND: str = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_KEY_PREFIX: str = "seolens:report:"
    CACHE_TTL_SECONDS: int = 0  # 0 = no expiry

    # Analysis
    KEYWORD_TEXT_LIMIT: int = 5000
    KEYWORD_MIN_LENGTH: int = 3
    UNMEASURED_PERFORMANCE_SCORE: int = 100

    # Comma-separated substrings matched against <script src>
    PIXEL_TRACKER_PATTERNS: str = "facebook.net"
    ANALYTICS_PATTERNS: str = "google-analytics.com,gtag"

    class Config:
        env_file = ".env"
        case_sensitive = True

    @property
    def pixel_tracker_patterns_list(self) -> List[str]:
        return [p.strip() for p in self.PIXEL_TRACKER_PATTERNS.split(",") if p.strip()]

    @property
    def analytics_patterns_list(self) -> List[str]:
        return [p.strip() for p in self.ANALYTICS_PATTERNS.split(",") if p.strip()]


settings = Settings()
