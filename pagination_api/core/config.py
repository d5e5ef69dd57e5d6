from functools import lru_cache
from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import ClassVar

from pagination_api.schemas.pagination import PaginationDefaults


class Settings(BaseSettings):
    PROJECT_NAME: str = "Pagination API"
    API_V1_STR: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    PAGINATION_DEFAULT_PAGE: PositiveInt = 1
    PAGINATION_DEFAULT_LIMIT: PositiveInt = 12

    model_config: ClassVar[SettingsConfigDict] = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="allow",
    )

    def pagination_defaults(self) -> PaginationDefaults:
        return PaginationDefaults(
            page=self.PAGINATION_DEFAULT_PAGE,
            limit=self.PAGINATION_DEFAULT_LIMIT,
        )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
