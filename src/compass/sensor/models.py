"""Value types exchanged between the sensor layer and the heading engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator


@dataclass(frozen=True)
class SensorSample:
    """Single accelerometer or magnetometer reading (x, y, z)."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))


@dataclass(frozen=True)
class RotationVector:
    """Pre-fused rotation vector reading: vector part of a unit quaternion."""

    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        return iter((self.x, self.y, self.z))


class SensorType(Enum):
    ACCELEROMETER = "accelerometer"
    MAGNETIC_FIELD = "magnetic_field"
    ROTATION_VECTOR = "rotation_vector"


class SensorAccuracy(IntEnum):
    """Sensor reliability, ordered lowest to highest confidence."""

    NO_CONTACT = 0
    UNRELIABLE = 1
    LOW = 2
    MEDIUM = 3
    HIGH = 4


class DisplayRotation(Enum):
    """Screen rotation relative to the device's natural orientation."""

    ROTATION_0 = 0
    ROTATION_90 = 90
    ROTATION_180 = 180
    ROTATION_270 = 270

    @property
    def degrees(self) -> int:
        return self.value

    @classmethod
    def from_degrees(cls, degrees: int) -> "DisplayRotation":
        """Map a surface rotation in degrees; anything unrecognised is ROTATION_0."""
        for rotation in cls:
            if rotation.value == degrees:
                return rotation
        return cls.ROTATION_0


CARDINAL_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


@dataclass(frozen=True)
class Azimuth:
    """Compass heading in degrees, always normalized to [0, 360)."""

    degrees: float = field(default=0.0)

    def __post_init__(self) -> None:
        # angle_math imports this module
        from compass.sensor.angle_math import normalize

        object.__setattr__(self, "degrees", normalize(self.degrees))

    @property
    def cardinal_direction(self) -> str:
        """8-point compass direction; each sector is 45° centred on its name."""
        index = int((self.degrees + 22.5) // 45) % 8
        return CARDINAL_DIRECTIONS[index]

    def __str__(self) -> str:
        return f"{self.degrees:.1f}° {self.cardinal_direction}"
