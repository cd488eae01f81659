from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    html_dir: Path = Path("assets/html")
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1/"
    http_timeout: float = 20
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000
