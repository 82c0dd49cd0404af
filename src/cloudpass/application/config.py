from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from cloudpass.domain.constants import DEFAULT_SESSION_SIZE, NEW_QUESTION_WEIGHT

def config_files() -> list[Path]:
    return [
        Path.home() / ".config/cloudpass/config.toml",
        Path.home() / ".cloudpass.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for cloudpass.
    Supports loading from:
    1. Environment variables (CLOUDPASS_*)
    2. Config file (~/.config/cloudpass/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOUDPASS_",
        extra="ignore",
    )

    # Paths
    question_bank_dir: Path = Field(default_factory=lambda: Path.cwd() / "questions")
    mastery_store_path: Path = Field(
        default_factory=lambda: Path.home() / ".config/cloudpass/mastery.json"
    )

    # Selection
    new_question_weight: float = Field(default=NEW_QUESTION_WEIGHT, gt=0)
    session_size: int = Field(default=DEFAULT_SESSION_SIZE, ge=1)
    seed: int | None = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; CLI overrides beat env, env beats the file
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("question_bank_dir", "mastery_store_path", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/cloudpass/config.toml (if exists)
    3. Environment variables (CLOUDPASS_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
