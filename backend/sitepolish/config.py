from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    supabase_url: str = ""
    supabase_key: str = ""
    unsplash_access_key: str = ""
    pexels_api_key: str = ""

    # Design generation
    default_model: str = "claude-sonnet-4-5-20250929"
    design_max_tokens: int = 8000
    generation_timeout: int = 300  # seconds
    reference_headers_only: bool = False  # skip Claude, return the fixed reference headers
    reference_headers_dir: str = ""  # optional folder of header screenshots shown to Claude

    # Scraping
    http_timeout: float = 30.0  # seconds
    http_max_redirects: int = 5
    page_load_timeout: int = 30000  # milliseconds
    viewport_width: int = 1920
    viewport_height: int = 1080

    # Competitor research
    competitor_cache_days: int = 7
    max_competitors: int = 5

    class Config:
        # Look for .env in the repo root (two levels up from backend/sitepolish/)
        # In production env vars are injected directly, so .env is optional
        _env_path = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        env_file = _env_path if os.path.exists(_env_path) else None
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache()
def get_settings():
    return Settings()
