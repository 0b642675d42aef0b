from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Prismic
    PRISMIC_API_ENDPOINT: str = "https://spacetraveling.cdn.prismic.io/api/v2"
    PRISMIC_ACCESS_TOKEN: str = ""
    PRISMIC_DOCUMENT_TYPE: str = "prismicdesafio"
    CMS_TIMEOUT_SECONDS: float = 10.0

    # Blog
    SITE_TITLE: str = "spacetraveling"
    POSTS_PAGE_SIZE: int = 1
    MAX_LISTING_PAGES: int = 20
    REVALIDATE_SECONDS: int = 3600  # 1 hour

    # Logging
    LOG_LEVEL: str = "INFO"


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
