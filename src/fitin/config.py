"""Configuration management using pydantic-settings."""

import tomllib
from enum import Enum
from pathlib import Path
from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = "~/.local/share/fitin"
STORE_FILENAME = "documents.json"
CONFIG_PATH = Path("~/.config/fitin/config.toml").expanduser()


class LLMProvider(str, Enum):
    """Available analysis backends."""

    GATEWAY = "gateway"
    OLLAMA = "ollama"


class LLMConfig(BaseSettings):
    """AI gateway configuration."""

    model_config = SettingsConfigDict(env_prefix="FITIN_LLM_")

    provider: LLMProvider = LLMProvider.GATEWAY
    model: str = "google/gemini-2.5-flash"
    base_url: str = "https://ai.gateway.lovable.dev/v1"
    api_key: str = ""
    ollama_model: str = "gemma3:4b"
    ollama_url: str = "http://localhost:11434"
    timeout: float = 120.0


class PathsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FITIN_PATHS_")

    data_dir: Path = Path(DEFAULT_DATA_DIR).expanduser()

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @property
    def store(self) -> Path:
        return self.data_dir / STORE_FILENAME


class DeadlinesConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FITIN_DEADLINES_")

    window_days: int = 60
    critical_days: int = 7
    soon_days: int = 30


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FITIN_", env_nested_delimiter="__")

    paths: PathsConfig = PathsConfig()
    deadlines: DeadlinesConfig = DeadlinesConfig()
    llm: LLMConfig = LLMConfig()

    @model_validator(mode="after")
    def ensure_dirs(self) -> Self:
        self.paths.data_dir.mkdir(parents=True, exist_ok=True)
        return self


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        paths = PathsConfig(**data.get("paths", {}))
        deadlines = DeadlinesConfig(**data.get("deadlines", {}))
        llm = LLMConfig(**data.get("llm", {}))
        return Settings(paths=paths, deadlines=deadlines, llm=llm)

    return Settings()
