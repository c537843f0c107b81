from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    SERVER_NAME: str = "IP Counter"
    SERVER_HOST: str = "127.4.4.4"
    SERVER_PORT: int = 4444

    # Reporter
    REPORT_INTERVAL: float = 1.0  # seconds

    # Paths whose requests are counted per client IP
    COUNTED_PATHS: List[str] = ["/ping"]

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
