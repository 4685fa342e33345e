"""
Centralized configuration for the compass heading engine.

This module provides all configuration constants for:
- Sensor fusion (gravity/geomagnetic degeneracy limits, axis sizes)
- Platform sensor accuracy status codes
- Heading deviation alerting
- Haptic feedback pulses
- Mock sensor source used for headless runs

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from compass.utils.config import Config

    threshold = Config.ALERT_THRESHOLD_DEG
    if deviation > threshold:
        # Fire haptic feedback
"""


class Config:
    """System configuration constants for the compass heading engine."""

    # ==========================================================================
    # SENSOR FUSION: Vector sizes & degeneracy limits
    # ==========================================================================

    AXIS_SIZE = 3                       # x, y, z per sample
    ROTATION_MATRIX_SIZE = 9            # 3x3 row-major rotation matrix

    STANDARD_GRAVITY = 9.80665          # m/s²
    FREE_FALL_GRAVITY_FACTOR = 0.01     # |a|² below factor * g² means free fall
    MIN_GEOMAGNETIC_NORM = 0.1          # |E x A| below this means no usable field

    # ==========================================================================
    # SENSOR ACCURACY: Platform status codes
    # ==========================================================================

    SENSOR_STATUS_NO_CONTACT = -1
    SENSOR_STATUS_UNRELIABLE = 0
    SENSOR_STATUS_ACCURACY_LOW = 1
    SENSOR_STATUS_ACCURACY_MEDIUM = 2
    SENSOR_STATUS_ACCURACY_HIGH = 3

    # ==========================================================================
    # HEADING ALERTS: Deviation from the calibrated reference heading
    # ==========================================================================

    ALERT_THRESHOLD_DEG = 35.0          # Strictly greater than fires an alert

    # ==========================================================================
    # HAPTICS: One-shot vibration pulse
    # ==========================================================================

    HAPTIC_PULSE_DURATION_MS = 100
    HAPTIC_DEFAULT_AMPLITUDE = -1       # Platform default amplitude

    # ==========================================================================
    # MOCK SENSOR SOURCE: Synthetic samples for headless runs
    # ==========================================================================

    MOCK_MODE = "sweep"                 # "sweep" or "static"
    MOCK_START_HEADING_DEG = 0.0
    MOCK_SWEEP_STEP_DEG = 5.0           # Heading change per generated sample pair
    MOCK_FIELD_HORIZONTAL_UT = 20.0     # Horizontal geomagnetic component (μT)
    MOCK_FIELD_VERTICAL_UT = -40.0      # Vertical geomagnetic component (μT)
    MOCK_NOISE_STD = 0.0                # Gaussian noise on every axis
    MOCK_SEED = 0

    # ==========================================================================
    # TELEMETRY
    # ==========================================================================

    HEADING_LOG_DIR = "logs"
