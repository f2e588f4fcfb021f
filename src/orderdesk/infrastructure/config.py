from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env at the project root: src/orderdesk/infrastructure/config.py -> project root
_ROOT = Path(__file__).resolve().parents[3]
_ENV_FILE = _ROOT / ".env"


class Settings(BaseSettings):
    # Directory holding customers.json, orders.json and settings.json
    data_dir: Path = _ROOT / "data"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "ORDERDESK_",
        "env_file": _ENV_FILE if _ENV_FILE.is_file() else ".env",
        "extra": "ignore",
    }

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str | None) -> str:
        return (v or "INFO").strip().upper()


settings = Settings()
