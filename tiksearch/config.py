from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    tiktok_api_key: str = ""
    site_password: str = ""
    app_env: str = "development"  # development | production
    log_level: str = "INFO"
    log_file: str = ""

    search_api_url: str = "https://api.scrapecreators.com/v1/tiktok/search/top"
    search_region: str = "US"
    search_max_pages: int = 5
    search_page_size: int = 30  # assumed upstream page size, drives the cursor table
    search_page_timeout_s: float = 15.0  # 0 disables the per-page timeout
    search_http_timeout_s: float = 20.0
    search_default_publish_time: str = "this-week"
    search_default_sort_by: str = "most-liked"

    auth_cookie_name: str = "site-auth"
    auth_cookie_max_age_s: int = 60 * 60 * 24 * 30


settings = Settings()
