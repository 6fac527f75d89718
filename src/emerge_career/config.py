"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path(__file__).resolve().parent.parent.parent


# (section, key) in settings.yaml -> Settings field
YAML_FIELDS: dict[tuple[str, str], str] = {
    ("server", "host"): "host",
    ("server", "port"): "port",
    ("database", "url"): "database_url",
    ("database", "echo"): "database_echo",
    ("llm", "base_url"): "llm_base_url",
    ("llm", "model"): "llm_model",
    ("llm", "temperature"): "llm_temperature",
    ("providers", "course"): "course_provider",
    ("providers", "trends"): "trends_provider",
    ("providers", "timeout_seconds"): "http_timeout_seconds",
}


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Non-secret defaults from ``config/settings.yaml``, mapped by YAML_FIELDS."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        path = _find_project_root() / "config" / "settings.yaml"
        if not path.exists():
            return {}
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

        values = {}
        for (section, key), field in YAML_FIELDS.items():
            value = (data.get(section) or {}).get(key)
            if value is not None:
                values[field] = value
        return values


class Settings(BaseSettings):
    """Application settings loaded from environment and config files.

    Every credential is optional: a missing key routes the matching
    content adapter to its fallback output instead of failing startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Persistence (None selects the in-memory backend)
    database_url: str | None = Field(default=None)
    database_echo: bool = Field(default=False)

    # Generative text (any OpenAI-compatible chat completions endpoint)
    llm_api_key: str | None = Field(default=None)
    llm_base_url: str | None = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai/"
    )
    llm_model: str = Field(default="gemini-2.0-flash")
    llm_temperature: float = Field(default=0.7)

    # Content services
    youtube_api_key: str | None = Field(default=None)
    course_provider: Literal["llm", "classcentral"] = Field(default="llm")
    trends_provider: Literal["news", "llm"] = Field(default="news")
    http_timeout_seconds: float = Field(default=10.0)

    # Authentication (optional: None disables the shared-secret check)
    app_secret: str | None = Field(default=None)

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5000)
    allowed_origins: str = Field(default="http://localhost:5000,http://127.0.0.1:5000")

    project_root: Path = Field(default_factory=_find_project_root)

    @property
    def allowed_origin_list(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Explicit arguments win, then the environment and ``.env``; the YAML
        file only fills what none of those set."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
