"""AlertState data model holding the previously committed sensor values."""

from pydantic import BaseModel, Field

from .sensor_snapshot import SensorSnapshot


class AlertState(BaseModel):
    """Values of the last evaluated snapshot, used for edge detection.

    The baseline (no fire, zero smoke, zero temperature) is what an alert
    session starts from before any snapshot has arrived.
    """

    model_config = {
        "frozen": True,
        "extra": "forbid"
    }

    previous_fire: int = Field(default=1, description="Fire value of the last snapshot")
    previous_smoke: int = Field(default=0, description="Smoke value of the last snapshot")
    previous_temperature: int = Field(
        default=0,
        description="Temperature value of the last snapshot"
    )

    @classmethod
    def baseline(cls) -> "AlertState":
        """State before the first snapshot."""
        return cls()

    @classmethod
    def from_snapshot(cls, snapshot: SensorSnapshot) -> "AlertState":
        """State to commit once ``snapshot`` has been evaluated."""
        return cls(
            previous_fire=snapshot.fire,
            previous_smoke=snapshot.smoke,
            previous_temperature=snapshot.temperature
        )
