"""
Configuration management for the Rookie Draft Board
"""
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from exceptions import ConfigurationException

DRAFT_MODES = {"linear", "snake"}


class DraftBoardConfig(BaseSettings):
    """Application configuration with environment variable support."""

    # Draft settings
    draft_team_count: int = 12
    draft_rounds: int = 4
    draft_mode: str = "linear"  # "linear" or "snake"

    # Player defaults
    default_grade: int = 75
    default_tier: int = 3
    seed_sample_data: bool = True

    # HTTP server settings
    server_host: str = "127.0.0.1"
    server_port: int = 5000

    # Board API settings (used by the caller-side client)
    board_api_url: str = "http://127.0.0.1:5000/api"
    board_api_token: str = ""  # Empty string means no Authorization header

    # Sleeper API settings
    sleeper_api_url: str = "https://api.sleeper.app"
    sleeper_api_version: int = 1
    sleeper_league_id: str = "1180257270885261312"
    sleeper_players_cache_ttl: int = 0  # 0 means keep until invalidated

    # API Constants
    default_timeout: int = 10

    # Application settings
    log_level: str = "INFO"
    log_dir: str = "logs"
    environment: str = "development"
    testing: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"  # Ignore extra environment variables
    )

    @field_validator('draft_mode')
    @classmethod
    def validate_draft_mode(cls, v: str) -> str:
        mode = v.lower()
        if mode not in DRAFT_MODES:
            raise ValueError(f"draft_mode must be one of {sorted(DRAFT_MODES)}")
        return mode

    @field_validator('draft_team_count', 'draft_rounds')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment.lower() == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.testing

    @property
    def draft_total_picks(self) -> int:
        """Calculate total picks in draft (derived value)."""
        return self.draft_rounds * self.draft_team_count


# Global configuration instance - lazily initialized to avoid import-time errors
_config = None

def get_config() -> DraftBoardConfig:
    """
    Get the global configuration instance.

    Raises:
        ConfigurationException: If the environment holds invalid settings
    """
    global _config
    if _config is None:
        try:
            _config = DraftBoardConfig()
        except ValidationError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e
    return _config
