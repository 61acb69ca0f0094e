from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Record store
    pocketbase_url: str = "http://127.0.0.1:8090"
    pocketbase_token: Optional[str] = None
    recipes_per_page: int = 30

    # Realtime
    realtime_reconnect_delay: float = 3.0

    # Grocery list consolidation
    grocery_similarity_threshold: float = 0.8

    # Observability
    logfire_token: Optional[str] = None
    log_level: str = "info"

    # Server Configuration
    port: int = 3000
    debug: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # Allow POCKETBASE_URL or pocketbase_url


# Create singleton instance
settings = Settings()
