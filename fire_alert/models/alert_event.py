"""AlertEvent data model for sensor alerts and source notices."""

from enum import Enum
from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, field_validator


class AlertType(str, Enum):
    """What an alert or notice is about."""

    # Sensor alerts
    FIRE_DETECTED = "fire_detected"
    HIGH_SMOKE = "high_smoke"
    HIGH_TEMPERATURE = "high_temperature"

    # Source notices
    SOURCE_ERROR = "source_error"
    NO_DATA = "no_data"


class AlertSeverity(str, Enum):
    """How urgently the user should react."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


SENSOR_ALERT_TYPES = frozenset({
    AlertType.FIRE_DETECTED,
    AlertType.HIGH_SMOKE,
    AlertType.HIGH_TEMPERATURE
})


class AlertEvent(BaseModel):
    """One alert or notice raised while evaluating the sensor stream."""

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "use_enum_values": True
    }

    alert_type: AlertType = Field(description="Alert or notice kind")
    severity: AlertSeverity = Field(description="Urgency")
    message: str = Field(min_length=1, description="Text shown to the user")
    details: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Readings or error text behind the message"
    )

    @field_validator("message")
    @classmethod
    def strip_message(cls, v: str) -> str:
        return v.strip()

    @property
    def is_sensor_alert(self) -> bool:
        """True for fire/smoke/temperature alerts, False for source notices."""
        return AlertType(self.alert_type) in SENSOR_ALERT_TYPES

    @classmethod
    def create_fire_alert(cls) -> "AlertEvent":
        """Create a fire detected alert."""
        return cls(
            alert_type=AlertType.FIRE_DETECTED,
            severity=AlertSeverity.CRITICAL,
            message="🔥 Fire Detected!"
        )

    @classmethod
    def create_smoke_alert(cls, smoke: int) -> "AlertEvent":
        """Create a high smoke level alert."""
        return cls(
            alert_type=AlertType.HIGH_SMOKE,
            severity=AlertSeverity.WARNING,
            message=f"💨 High Smoke Level: {smoke}",
            details={"smoke": smoke}
        )

    @classmethod
    def create_temperature_alert(cls, temperature: int) -> "AlertEvent":
        """Create a high temperature alert."""
        return cls(
            alert_type=AlertType.HIGH_TEMPERATURE,
            severity=AlertSeverity.WARNING,
            message=f"🌡 High Temperature: {temperature}°C",
            details={"temperature": temperature}
        )

    @classmethod
    def create_source_error(cls, error_message: str) -> "AlertEvent":
        """Create a data source failure notice."""
        return cls(
            alert_type=AlertType.SOURCE_ERROR,
            severity=AlertSeverity.ERROR,
            message=f"❌ Database error: {error_message or 'unknown error'}",
            details={"error": error_message}
        )

    @classmethod
    def create_no_data_notice(cls) -> "AlertEvent":
        """Create a missing dataset notice."""
        return cls(
            alert_type=AlertType.NO_DATA,
            severity=AlertSeverity.WARNING,
            message="⚠ No data found in the database!"
        )

    def to_log_entry(self) -> str:
        """One-line form used in log output."""
        return f"[{self.severity.upper()}] {self.alert_type}: {self.message}"

    def __str__(self) -> str:
        return self.message
