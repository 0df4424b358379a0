import logging
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_base_url: str = "http://localhost:3000/api"
    api_token: str = ""
    # Seconds to wait for the connection and response headers
    request_timeout: float = 30.0
    # Seconds to wait between chunks; unset means wait indefinitely
    stream_read_timeout: Optional[float] = None
    log_level: str = "INFO"

    class Config:
        env_prefix = "POSTSTREAM_"
        env_file = ".env"


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Set up console logging and apply ``settings.log_level`` to poststream loggers."""
    settings = settings or Settings()
    level = settings.log_level.upper()
    logging.basicConfig(level=level)
    logging.getLogger("poststream").setLevel(level)
