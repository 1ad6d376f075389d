import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


@dataclass
class Settings:
    # Application
    app_name: str = _env("APP_NAME", "Local Library")
    environment: str = _env("ENVIRONMENT", "development")
    log_level: str = _env("LOG_LEVEL", "INFO")

    # Server
    api_host: str = _env("API_HOST", "127.0.0.1")
    api_port: int = field(default_factory=lambda: int(os.getenv("API_PORT", "8000")))

    # Document store
    database_url: str = _env("DATABASE_URL", "sqlite:///local_library.db")

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


settings = Settings()
