"""SensorSnapshot data model for one set of fire/smoke/temperature readings."""

from pydantic import BaseModel, Field, computed_field


class SensorSnapshot(BaseModel):
    """One complete set of sensor readings delivered by the data source.

    Readings are raw integers as reported by the sensors. No range checks are
    applied: negative or very large values are accepted and evaluated as-is.
    """

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    fire: int = Field(description="Flame sensor output (0 = fire, non-zero = no fire)")
    smoke: int = Field(description="Smoke sensor reading, higher means more smoke")
    temperature: int = Field(description="Temperature in degrees Celsius")

    @computed_field
    @property
    def fire_detected(self) -> bool:
        """True when the flame sensor reports fire."""
        return self.fire == 0

    def __str__(self) -> str:
        """String representation for logging."""
        return (
            f"fire={self.fire} smoke={self.smoke} "
            f"temperature={self.temperature}"
        )
