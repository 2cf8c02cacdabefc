import os

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    yelp_api_key: str = os.getenv("YELP_API_KEY", "")
    yelp_api_base: str = os.getenv("YELP_API_BASE", "https://api.yelp.com/v3")
    yelp_request_timeout: float = float(os.getenv("YELP_REQUEST_TIMEOUT", "10"))
    yelp_cache_backend: str = os.getenv("YELP_CACHE_BACKEND", "file")
    yelp_cache_dir: str = os.getenv("YELP_CACHE_DIR", ".yelp-cache")
    yelp_cache_ttl_seconds: int = int(os.getenv("YELP_CACHE_TTL_SECONDS", "86400"))
    session_timeout_seconds: int = int(os.getenv("SESSION_TIMEOUT_SECONDS", "3600"))
    allowed_origins: str = os.getenv("ALLOWED_ORIGINS", "")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def get_settings() -> Settings:
    return Settings()
