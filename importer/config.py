from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SiteImporterBot/1.0; +https://github.com/site-importer)"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    log_level: str = "INFO"
    scrape_timeout_ms: int = 30000
    scrape_max_pages: int = 5
    scrape_user_agent: str = DEFAULT_USER_AGENT
    crawl_delay: float = 0.5  # seconds between crawl requests
    max_body_bytes: int = 5 * 1024 * 1024
    headless_enabled: bool = True
    headless_timeout_ms: int = 30000
    max_jobs: int = 1000
