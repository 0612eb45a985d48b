"""Application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Projector"
    app_version: str = "0.1.0"
    debug: bool = False

    # Generation service
    generation_model: str = "sonnet"
    generation_temperature: float = 0.7
    generation_max_tokens: int = 2000

    # Anthropic API (uses ANTHROPIC_API_KEY env var by default)
    anthropic_api_key: str | None = None

    # Wizard
    default_max_questions: int = 10
    domains_config_path: str | None = None  # Defaults to ~/.config/projector/config.json
    templates_dir: str | None = None  # Extra template YAML files, override built-ins by name


settings = Settings()
