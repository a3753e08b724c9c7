from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field, AnyUrl

class Settings(BaseSettings):
    app_name: str = "LedgerCheck API"
    app_env: str = Field("development", alias="APP_ENV")
    app_url: AnyUrl | str = Field("http://localhost:3000", alias="APP_URL")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Max absolute gap between computed and attested balance
    balance_tolerance: Decimal = Field(Decimal("0.01"), alias="BALANCE_TOLERANCE", ge=0)

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
