from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "JobBoard"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    seed_catalog_on_startup: bool = True

    # Catalog prices are re-read from the products table at most once per window.
    price_cache_ttl_seconds: int = 60
    default_listing_days: int = 15
    extend_post_days: int = 7

    session_ttl_seconds: int = 7 * 24 * 3600  # 1 week

    paypal_client_id: str = ""
    paypal_client_secret: str = ""
    paypal_base_url: str = "https://api-m.sandbox.paypal.com"
    paypal_timeout_seconds: float = 15.0
    currency: str = "USD"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "jobboard.sqlite"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
