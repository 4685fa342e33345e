"""
Heading deviation monitor.

Holds the live azimuth, the calibration (reference) azimuth and the current
sensor accuracy. Every new azimuth is compared against the reference with a
wraparound-aware distance; anything strictly above the alert threshold asks
the caller to fire haptic feedback.

The reference heading only moves when calibrate() is called: the user aims
the device at a target, calibrates, and every later deviation is measured
against that snapshot. There is no debounce, so a heading hovering just
above the threshold alerts on every sample.

Usage:
    monitor = HeadingMonitor()
    monitor.update_azimuth(10.0)
    monitor.calibrate()
    if monitor.update_azimuth(50.0) is AlertDecision.ALERT:
        # 40° away from the reference
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from compass.sensor.angle_math import circular_difference, normalize
from compass.sensor.models import SensorAccuracy
from compass.utils.config_sections import HeadingAlertConfig, load_heading_alert_config

log = logging.getLogger(__name__)


class AlertDecision(Enum):
    ALERT = "alert"
    NO_ALERT = "no_alert"


@dataclass(frozen=True)
class HeadingState:
    """Snapshot of the monitor's state."""

    current_azimuth: float = 0.0
    calibration_azimuth: float = 0.0
    accuracy: SensorAccuracy = SensorAccuracy.NO_CONTACT


class HeadingMonitor:
    """Track the live heading and decide when it strays from the reference."""

    def __init__(self, config: Optional[HeadingAlertConfig] = None) -> None:
        self.config = config or load_heading_alert_config()
        self._current_azimuth = 0.0
        self._calibration_azimuth = 0.0
        self._accuracy = SensorAccuracy.NO_CONTACT
        self._last_deviation = 0.0

    @property
    def current_azimuth(self) -> float:
        return self._current_azimuth

    @property
    def calibration_azimuth(self) -> float:
        return self._calibration_azimuth

    @property
    def accuracy(self) -> SensorAccuracy:
        return self._accuracy

    @property
    def last_deviation(self) -> float:
        """Deviation computed by the most recent update_azimuth call."""
        return self._last_deviation

    @property
    def state(self) -> HeadingState:
        return HeadingState(
            current_azimuth=self._current_azimuth,
            calibration_azimuth=self._calibration_azimuth,
            accuracy=self._accuracy,
        )

    def update_azimuth(self, new_azimuth: float) -> AlertDecision:
        """Store the new heading and compare it with the reference."""
        self._current_azimuth = normalize(new_azimuth)
        deviation = circular_difference(self._calibration_azimuth, self._current_azimuth)
        self._last_deviation = deviation

        log.debug(f"Azimuth {self._current_azimuth:.2f}° deviation {deviation:.2f}°")

        if deviation > self.config.alert_threshold_deg:
            return AlertDecision.ALERT
        return AlertDecision.NO_ALERT

    def calibrate(self) -> float:
        """Take the current heading as the new reference and return it."""
        self._calibration_azimuth = self._current_azimuth
        log.info(f"Calibrated azimuth: {self._calibration_azimuth:.2f}°")
        return self._calibration_azimuth

    def update_accuracy(self, accuracy: SensorAccuracy) -> None:
        self._accuracy = accuracy
