"""Configuration management for Folio."""

from contextvars import ContextVar
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from folio.exceptions import ConfigurationError


# Paths
DEFAULT_CONFIG_PATH = Path("~/.folio/config.yaml").expanduser()
LOCAL_CONFIG_FILENAME = "config.yaml"

# YAML file read by the settings source while `Config.from_yaml` runs
_yaml_file: ContextVar[Path | None] = ContextVar("folio_yaml_file", default=None)


class ModelConfig(BaseModel):
    """Model configuration."""

    provider: str = "ollama"
    model: str = "llama3.1:8b"
    base_url: str = "http://127.0.0.1:11434"
    temperature: float = 0.7
    max_tokens: int = 4096
    api_key: str = ""
    timeout: float = 120.0


class AgentConfig(BaseModel):
    """Tool loop configuration."""

    max_iterations: int = Field(default=5, ge=1)
    system_prompt_file: str = "system_prompt.md"


class WorkspaceConfig(BaseModel):
    """Root directory that relative tool paths resolve against."""

    path: str = "."


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    format: Literal["console", "json"] = "console"
    file: str = "app.log"
    echo: bool = False


class Config(BaseSettings):
    """Main configuration for Folio."""

    model: ModelConfig = Field(default_factory=ModelConfig)
    agent: AgentConfig = Field(default_factory=AgentConfig)
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="FOLIO_",
        env_file=".env",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Environment beats the YAML file; explicit init kwargs beat both."""
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=_yaml_file.get()),
            file_secret_settings,
        )

    @classmethod
    def resolve_default_config_path(cls) -> Path:
        """Resolve default config path with local-first precedence."""
        local_path = Path.cwd() / LOCAL_CONFIG_FILENAME
        if local_path.exists():
            return local_path
        return DEFAULT_CONFIG_PATH

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(path).expanduser() if path else cls.resolve_default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        token = _yaml_file.set(config_path)
        try:
            return cls()
        finally:
            _yaml_file.reset(token)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from YAML; env vars are applied by pydantic-settings."""
        return cls.from_yaml()

    def save(self, path: Path | str | None = None) -> None:
        """Save configuration to YAML file."""
        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.model_dump(exclude_none=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def resolved_workspace_path(self, runtime_base: Path | str | None = None) -> Path:
        """Resolve workspace path, anchoring relative paths to runtime base/cwd."""
        raw = Path(self.workspace.path).expanduser()
        if raw.is_absolute():
            return raw.resolve()
        anchor = Path(runtime_base).expanduser().resolve() if runtime_base is not None else Path.cwd().resolve()
        return (anchor / raw).resolve()


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.load()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
