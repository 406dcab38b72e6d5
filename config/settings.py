"""
Evidence Analyzer - Configuration Management

Central configuration using Pydantic settings with multi-provider LLM support.
"""

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProvider(str, Enum):
    """Supported LLM providers."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # LLM Provider Configuration
    llm_provider: LLMProvider = Field(
        default=LLMProvider.OPENAI,
        description="LLM provider to use"
    )

    # Provider API Keys
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic API key")
    google_api_key: Optional[str] = Field(default=None, description="Google API key")

    # Model Configuration
    llm_model: Optional[str] = Field(
        default=None,
        description="Model to use (defaults based on provider)"
    )
    llm_temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=1.0,
        description="Model temperature"
    )
    llm_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a single provider call"
    )

    # Checklist Service
    checklist_service_url: str = Field(
        default="http://localhost:8080/",
        description="Base URL of the checklist service"
    )
    checklists_path: str = Field(
        default="/api/checklists",
        description="Path for fetching a checklist by id"
    )
    progress_path_template: str = Field(
        default="/api/checklists/{checklist_id}/progress",
        description="Path template for checklist progress"
    )
    checklist_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Checklist service request timeout"
    )

    # Storage Configuration
    data_dir: Path = Field(
        default=Path("./data"),
        description="Data directory (logs)"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=5000, description="API port")
    api_env: str = Field(default="development", description="API environment")
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="CORS origins (comma-separated)"
    )
    rate_limit_analysis: str = Field(
        default="10/minute",
        description="Rate limit for model-backed endpoints"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_to_file: bool = Field(default=True, description="Also write a dated log file")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def active_api_key(self) -> Optional[str]:
        """Get the API key for the active provider."""
        key_map = {
            LLMProvider.OPENAI: self.openai_api_key,
            LLMProvider.ANTHROPIC: self.anthropic_api_key,
            LLMProvider.GEMINI: self.google_api_key,
        }
        return key_map.get(self.llm_provider)

    @property
    def default_model(self) -> str:
        """Get the default model for the active provider."""
        if self.llm_model:
            return self.llm_model

        defaults = {
            LLMProvider.OPENAI: "gpt-4o-mini",
            LLMProvider.ANTHROPIC: "claude-3-5-sonnet-20240620",
            LLMProvider.GEMINI: "gemini-1.5-pro",
        }
        return defaults.get(self.llm_provider, "gpt-4o-mini")

    @property
    def logs_dir(self) -> Path:
        """Directory for log files."""
        path = self.data_dir / "logs"
        path.mkdir(parents=True, exist_ok=True)
        return path


# Global settings instance
settings = Settings()
