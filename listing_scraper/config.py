from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Browser session
    headless: bool = True
    browser_args: list[str] = [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
    ]

    # Page traversal (all durations in milliseconds)
    navigation_timeout_ms: int = 60_000
    probe_selector: str = "a"
    probe_timeout_ms: int = 5_000
    settle_delay_ms: int = 2_000
    pagination_delay_ms: int = 1_500
    next_page_label: str = "»"

    # Extraction
    excluded_markers: list[str] = ["عقارات في"]

    # Jobs
    default_limit_pages: int = 1


settings = Settings()
