from functools import lru_cache
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    BASE_DIR: Path = Path(__file__).resolve().parent.parent

    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8080

    CONTAINER_IMAGE: str = Field(
        default="ombansod",
        description="Image every provisioned container is created from"
    )

    CONTAINER_PORT: int = Field(
        default=80,
        description="Container-internal TCP port bound to the requested host port"
    )

    BIND_HOST_IP: str = "0.0.0.0"

    STATIC_DIR: Path = Field(
        default=BASE_DIR / "static",
        description="Directory served under /static"
    )

    INDEX_FILE: Path = BASE_DIR / "static" / "index.html"

    LOG_LEVEL: str = "INFO"

    CORS_ORIGINS: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
