"""AppConfiguration data model for data source, notification and display settings."""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field, field_validator


class SourceSettings(BaseModel):
    """Realtime database connection settings."""

    database_url: Optional[str] = Field(
        default=None,
        description="Base URL of the realtime database (https://<project>.firebaseio.com)"
    )
    path: str = Field(
        default="",
        description="Database path holding the sensor readings"
    )
    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        description="Connection timeout in seconds"
    )
    read_timeout_seconds: float = Field(
        default=90.0,
        gt=0.0,
        le=3600.0,
        description="Maximum silence on the event stream before failing"
    )

    @field_validator('database_url')
    @classmethod
    def validate_database_url(cls, v: Optional[str]) -> Optional[str]:
        """Validate and normalise the database URL."""
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if not v.startswith(("https://", "http://")):
            raise ValueError("database_url must start with https:// or http://")
        return v.rstrip("/")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Strip surrounding slashes from the database path."""
        return v.strip().strip("/")

    @property
    def stream_url(self) -> Optional[str]:
        """REST endpoint used for the event stream."""
        if self.database_url is None:
            return None
        if self.path:
            return f"{self.database_url}/{self.path}.json"
        return f"{self.database_url}/.json"


class NotificationSettings(BaseModel):
    """Alert notification settings."""

    enabled: bool = Field(default=True, description="Raise notifications for new alerts")
    alert_title: str = Field(
        default="🚨 ALERT!",
        min_length=1,
        max_length=100,
        description="Title of alert notifications"
    )
    notice_timeout_seconds: float = Field(
        default=3.0,
        gt=0.0,
        le=60.0,
        description="How long transient notices stay visible"
    )


class DisplaySettings(BaseModel):
    """Terminal display settings."""

    show_history: bool = Field(default=False, description="Show history list on start")
    fire_station_number: str = Field(
        default="101",
        min_length=1,
        max_length=20,
        description="Number shown by the call fire station action"
    )


class SimulationSettings(BaseModel):
    """Demo mode snapshot generator settings."""

    interval_seconds: float = Field(
        default=2.0,
        gt=0.0,
        le=60.0,
        description="Delay between simulated snapshots"
    )
    seed: Optional[int] = Field(default=None, description="Random seed for repeatable demos")


class AppConfiguration(BaseModel):
    """Complete application configuration."""

    model_config = {
        "validate_assignment": True,
        "extra": "forbid",
        "json_schema_extra": {
            "example": {
                "source": {"database_url": "https://example.firebaseio.com", "path": ""},
                "notifications": {"alert_title": "🚨 ALERT!"},
                "display": {"fire_station_number": "101"}
            }
        }
    }

    source: SourceSettings = Field(
        default_factory=SourceSettings,
        description="Realtime database settings"
    )
    notifications: NotificationSettings = Field(
        default_factory=NotificationSettings,
        description="Notification settings"
    )
    display: DisplaySettings = Field(
        default_factory=DisplaySettings,
        description="Display settings"
    )
    simulation: SimulationSettings = Field(
        default_factory=SimulationSettings,
        description="Demo mode settings"
    )
    enable_debug_logging: bool = Field(
        default=False,
        description="Enable debug level logging"
    )

    def export_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary for YAML serialization."""
        return self.model_dump(mode="json")
