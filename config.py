from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import List
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    app_name: str = "Board Bank API"
    default_starting_balance: float = 1500
    default_currency: str = "M$"
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings():
    return Settings()


def configure_logging(settings: Settings) -> None:
    """
    設定 root logger

    只在程式進入點呼叫一次（main.py），測試不需要呼叫
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    logger.debug(f"Logging configured at {logging.getLevelName(level)}")
