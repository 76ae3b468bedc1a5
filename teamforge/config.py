"""
Configuration management for the Team Parallel Optimizer.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from typing import List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class OptimizerSettings(BaseSettings):
    """Defaults for expansion strategies and workload accounting."""

    model_config = SettingsConfigDict(env_prefix="OPTIMIZER_")

    # Trigger conditions
    min_repetitiveness_score: float = Field(default=6, ge=0, le=10)
    min_workload_score: float = Field(default=7, ge=0, le=10)
    max_single_role_workload: float = Field(default=80, ge=0, le=100)
    min_parallel_potential: float = Field(default=5, ge=0, le=10)

    # Expansion rules
    max_subdivisions_per_role: int = Field(default=5, ge=1, le=10)
    workload_distribution_strategy: str = Field(default="capacity_based")
    priority_roles: str = Field(default="developer,tester,designer,analyst")

    # Efficiency targets
    target_parallel_efficiency: float = Field(default=2.5, ge=1, le=5)
    max_team_size: int = Field(default=30, ge=3, le=50)
    min_efficiency_improvement: float = Field(default=1.5, ge=0, le=5)

    # Workload accounting
    weekly_hours: float = Field(default=40.0, gt=0)
    default_task_hours: float = Field(default=8.0, ge=0)
    large_task_hours: float = Field(default=16.0, ge=0)
    subdivision_load_ceiling: float = Field(default=80.0, ge=0, le=100)

    @field_validator("workload_distribution_strategy")
    @classmethod
    def validate_distribution(cls, v: str) -> str:
        valid = ["even", "capacity_based", "skill_based"]
        if v not in valid:
            raise ValueError(f"Distribution strategy must be one of {valid}")
        return v

    @property
    def priority_roles_list(self) -> List[str]:
        """Parse priority roles into an ordered list."""
        return [role.strip() for role in self.priority_roles.split(",") if role.strip()]


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    json_format: bool = Field(default=True, alias="JSON_LOGS")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        alias="CORS_ORIGINS"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",")]


class Settings(BaseSettings):
    """Main application settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_name: str = Field(default="Team Parallel Optimizer", alias="APP_NAME")
    api_version: str = Field(default="v1", alias="API_VERSION")
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=8000, alias="PORT")

    @property
    def optimizer(self) -> OptimizerSettings:
        return OptimizerSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def security(self) -> SecuritySettings:
        return SecuritySettings()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
