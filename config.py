import os
from dotenv import load_dotenv
from pydantic import BaseModel

REQUIRED_VARS = ("GEMINI_API_KEY", "GOOGLE_MAPS_API_KEY")


class Settings(BaseModel):
    gemini_api_key: str
    google_maps_api_key: str
    gemini_model: str = "gemini-1.5-flash"
    gemini_timeout: float = 30.0
    maps_timeout: float = 30.0
    cache_ttl: float = 300.0
    cache_maxsize: int = 1024
    port: int = 3000
    app_env: str = "development"
    log_level: str = "INFO"

    @property
    def self_hosted(self) -> bool:
        """Whether `python main.py` should start its own listener."""
        return self.app_env.lower() != "production"


def load_settings() -> Settings:
    """Load .env into the process environment and validate required secrets."""
    load_dotenv()

    missing = [name for name in REQUIRED_VARS if not os.getenv(name)]
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}. "
            "Set them in .env or export them, e.g. export GEMINI_API_KEY=your_key_here"
        )

    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY"),
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-flash"),
        gemini_timeout=os.getenv("GEMINI_TIMEOUT", 30.0),
        maps_timeout=os.getenv("MAPS_TIMEOUT", 30.0),
        cache_ttl=os.getenv("CACHE_TTL", 300.0),
        cache_maxsize=os.getenv("CACHE_MAXSIZE", 1024),
        port=os.getenv("PORT", 3000),
        app_env=os.getenv("APP_ENV", "development"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
