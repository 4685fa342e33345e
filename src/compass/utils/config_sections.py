"""
Typed configuration sections for the compass heading engine.

This module provides strongly-typed configuration sections to replace
scattered getattr(Config, ...) calls with proper type hints and defaults.

Benefits:
- Type safety: IDE autocomplete and type checking
- Discoverability: All config options visible in one place
- Default values: Centralized and documented
- Better testing: Can mock entire config sections
"""

from dataclasses import dataclass


@dataclass
class FusionConfig:
    """Configuration for accelerometer + magnetometer fusion."""

    # Gravity reference used for the free-fall check
    standard_gravity: float = 9.80665
    free_fall_gravity_factor: float = 0.01

    # Minimum norm of the east vector (E x A) before it is normalized
    min_geomagnetic_norm: float = 0.1

    @property
    def free_fall_gravity_squared(self) -> float:
        return self.free_fall_gravity_factor * self.standard_gravity ** 2


@dataclass
class HeadingAlertConfig:
    """Configuration for deviation alerting against the calibrated heading."""

    alert_threshold_deg: float = 35.0  # Strictly greater than fires an alert


@dataclass
class HapticConfig:
    """Configuration for the haptic pulse fired on an alert."""

    pulse_duration_ms: int = 100
    amplitude: int = -1  # Platform default amplitude


@dataclass
class MockSensorConfig:
    """Configuration for the synthetic sensor source."""

    mode: str = "sweep"
    start_heading_deg: float = 0.0
    sweep_step_deg: float = 5.0
    field_horizontal_ut: float = 20.0
    field_vertical_ut: float = -40.0
    noise_std: float = 0.0
    seed: int = 0


def load_fusion_config() -> FusionConfig:
    """
    Load fusion configuration from Config with fallback defaults.

    Returns:
        FusionConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return FusionConfig(
        standard_gravity=getattr(Config, "STANDARD_GRAVITY", 9.80665),
        free_fall_gravity_factor=getattr(Config, "FREE_FALL_GRAVITY_FACTOR", 0.01),
        min_geomagnetic_norm=getattr(Config, "MIN_GEOMAGNETIC_NORM", 0.1),
    )


def load_heading_alert_config() -> HeadingAlertConfig:
    """
    Load heading alert configuration from Config with fallback defaults.

    Returns:
        HeadingAlertConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return HeadingAlertConfig(
        alert_threshold_deg=getattr(Config, "ALERT_THRESHOLD_DEG", 35.0),
    )


def load_haptic_config() -> HapticConfig:
    """
    Load haptic configuration from Config with fallback defaults.

    Returns:
        HapticConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return HapticConfig(
        pulse_duration_ms=getattr(Config, "HAPTIC_PULSE_DURATION_MS", 100),
        amplitude=getattr(Config, "HAPTIC_DEFAULT_AMPLITUDE", -1),
    )


def load_mock_sensor_config() -> MockSensorConfig:
    """
    Load mock sensor configuration from Config with fallback defaults.

    Returns:
        MockSensorConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return MockSensorConfig(
        mode=getattr(Config, "MOCK_MODE", "sweep"),
        start_heading_deg=getattr(Config, "MOCK_START_HEADING_DEG", 0.0),
        sweep_step_deg=getattr(Config, "MOCK_SWEEP_STEP_DEG", 5.0),
        field_horizontal_ut=getattr(Config, "MOCK_FIELD_HORIZONTAL_UT", 20.0),
        field_vertical_ut=getattr(Config, "MOCK_FIELD_VERTICAL_UT", -40.0),
        noise_std=getattr(Config, "MOCK_NOISE_STD", 0.0),
        seed=getattr(Config, "MOCK_SEED", 0),
    )
