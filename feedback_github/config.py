"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App
    debug: bool = False
    environment: str = "development"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # GitHub target repository (issues + screenshot storage)
    github_repo_url: str = ""
    github_token: str = ""
    github_api_url: str = "https://api.github.com"
    github_image_branch: str = "main"
    github_image_dir: str = "images"

    # Feedback defaults
    feedback_labels: list[str] = ["feedback"]
    image_display_width: int = 300
    allow_empty_text: bool = True
    allow_prod_emulator_feedback: bool = True
    include_package_info: bool = True
    include_device_info: bool = True

    http_timeout: float = 15.0

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
