from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings

API_KEY_PLACEHOLDER = "YOUR_API_KEY_HERE"


class Settings(BaseSettings):
    gemini_api_key: str = API_KEY_PLACEHOLDER
    gemini_model: str = "gemini-1.5-flash"
    gemini_api_base_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    summary_word_count: int = 7
    summary_max_output_tokens: int = 30
    summary_prompt_chars: int = 1500
    max_content_chars: int = 3000
    max_urls_per_request: int = 10
    fetch_timeout_seconds: float = 10.0
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_allow_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"

    @property
    def has_api_key(self) -> bool:
        return bool(self.gemini_api_key) and self.gemini_api_key != API_KEY_PLACEHOLDER


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
