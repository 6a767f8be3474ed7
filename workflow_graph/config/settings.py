"""
Environment-aware configuration settings for the workflow graph layout engine.

Supports dev, test, and prod environments with appropriate defaults.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Supported deployment environments."""

    DEV = "dev"
    TEST = "test"
    PROD = "prod"


class Theme(str, Enum):
    """Color scheme requested by the rendering surface."""

    LIGHT = "light"
    DARK = "dark"


class LayoutSettings(BaseSettings):
    """
    Layout geometry, in canvas units.

    Node boxes are fixed-size; columns are at least min_level_width wide and
    stretch to fill the canvas when there are few levels.
    """

    model_config = SettingsConfigDict(env_prefix="LAYOUT_")

    node_width: float = Field(default=120.0, gt=0, description="Node box width")
    node_height: float = Field(default=60.0, gt=0, description="Node box height")
    node_spacing: float = Field(default=100.0, gt=0, description="Vertical distance between nodes in a level")
    padding: float = Field(default=50.0, ge=0, description="Canvas padding on every side")
    min_level_width: float = Field(default=200.0, gt=0, description="Minimum column width per level")

    # Starting canvas for a fresh session; grows but never shrinks
    initial_canvas_width: float = Field(default=1000.0, gt=0, description="Initial canvas width")
    initial_canvas_height: float = Field(default=700.0, gt=0, description="Initial canvas height")


class PresentationSettings(BaseSettings):
    """
    Presentation options passed through to the renderer.

    These never influence traversal or positioning.
    """

    model_config = SettingsConfigDict(env_prefix="PRESENTATION_")

    theme: Theme = Field(default=Theme.LIGHT, description="Light or dark color scheme")
    show_legend: bool = Field(default=True, description="Render the status legend")
    gradient: bool = Field(default=True, description="Gradient node fills instead of flat colors")
    title: str = Field(default="Workflow Graph", description="Graph title")

    @field_validator("theme", mode="before")
    @classmethod
    def validate_theme(cls, v: str | Theme) -> Theme:
        """Accept theme names case-insensitively."""
        if isinstance(v, Theme):
            return v
        return Theme(v.lower())


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False,  # LOG_LEVEL and log_level both work
        extra="ignore",        # Ignore unknown environment variables
    )

    # Application
    app_name: str = Field(default="Workflow Graph Layout Engine")
    environment: Environment = Field(default=Environment.DEV)
    debug: bool = Field(default=False)
    log_level: str = Field(default="INFO")

    # Renderer origins allowed to call the API; JSON list in CORS_ORIGINS
    cors_origins: list[str] = Field(default_factory=list)

    # Sub-settings
    layout: LayoutSettings = Field(default_factory=LayoutSettings)
    presentation: PresentationSettings = Field(default_factory=PresentationSettings)

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: str | Environment) -> Environment:
        """Validate and convert environment string to enum."""
        if isinstance(v, Environment):
            return v
        return Environment(v.lower())

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == Environment.DEV

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TEST

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PROD


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
