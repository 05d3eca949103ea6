from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # Event page fetching
    proxy_event_url: str = Field(
        default="",
        validation_alias=AliasChoices("PROXY_EVENT_URL", "VITE_PROXY_EVENT_URL"),
    )
    fetch_timeout: float = 10.0
    fetch_attempts: int = 2
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
    )

    # Batch crawl
    crawl_concurrency: int = 3
    crawl_delay: float = 0.1

    # Manually pasted schedules carry no year
    schedule_year: int = 2025

    # App
    log_level: str = "INFO"


settings = Settings()
