from functools import lru_cache

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class FridaSettings(BaseModel):
    api_key: str | None = None


class Settings(BaseSettings):
    # Frida upstream (Frida:ApiKey -> FRIDA__API_KEY)
    frida: FridaSettings = FridaSettings()
    frida_completions_url: str = "https://frida-llm-api.azurewebsites.net/v1/chat/completions"
    upstream_timeout: float = 100.0

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    cors_origins: list[str] = ["*"]

    # Uploader client
    relay_base_url: str = "http://localhost:5000"
    client_timeout: float | None = None
    classifier_model: str = "gpt-4o-mini"
    categories: list[str] = [
        "Nature",
        "Architecture",
        "People",
        "Animals",
        "Food",
        "Technology",
        "Art",
        "Sports",
        "Vehicles",
        "Documents",
    ]
    max_image_size_mb: int = 20

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
