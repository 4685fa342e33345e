"""
Thin adapter between platform sensor callbacks and the heading engine.

The platform (or a mock source) owns sensor subscription and threading; it
pushes every sample and accuracy event through this adapter, which routes
them into SensorFusion, AccuracyClassifier and HeadingMonitor and fires the
haptic pulse when the monitor asks for it.

The adapter is not synchronized. If samples arrive on several threads the
caller must serialize calls, e.g. with a single-consumer queue or a lock
around the adapter.

Usage:
    adapter = CompassSensorAdapter()
    adapter.set_display_rotation(90)
    update = adapter.on_sensor_changed(SensorType.ROTATION_VECTOR, (0.0, 0.0, 0.2))
    if update is not None:
        print(update.azimuth, update.decision)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from compass.heading.heading_monitor import AlertDecision, HeadingMonitor
from compass.hardware.haptic_driver import HapticDriver, LoggingHapticDriver
from compass.sensor import accuracy_classifier
from compass.sensor.angle_math import compensate_for_display_rotation
from compass.sensor.models import Azimuth, DisplayRotation, SensorAccuracy, SensorType
from compass.sensor.sensor_fusion import SensorFusion
from compass.telemetry.loggers.heading_logger import HeadingLogger
from compass.utils.config import Config
from compass.utils.config_sections import HapticConfig, load_haptic_config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeadingUpdate:
    """Result of routing one sample through the engine."""

    azimuth: Azimuth
    decision: AlertDecision
    deviation: float


class CompassSensorAdapter:
    """Route sensor events into the heading engine and drive haptics."""

    def __init__(
        self,
        fusion: Optional[SensorFusion] = None,
        monitor: Optional[HeadingMonitor] = None,
        haptic_driver: Optional[HapticDriver] = None,
        *,
        heading_source: SensorType = SensorType.ROTATION_VECTOR,
        haptic_config: Optional[HapticConfig] = None,
        heading_logger: Optional[HeadingLogger] = None,
    ) -> None:
        """
        Args:
            fusion: Sensor fusion instance (new one if omitted)
            monitor: Heading monitor instance (new one if omitted)
            haptic_driver: Vibrator used on alerts (logging driver if omitted)
            heading_source: Sensor whose accuracy events drive the status;
                MAGNETIC_FIELD when fusing raw accelerometer + magnetometer
            haptic_config: Pulse duration and amplitude
            heading_logger: Optional per-session file logger
        """
        self.fusion = fusion or SensorFusion()
        self.monitor = monitor or HeadingMonitor()
        self.haptic_driver = haptic_driver or LoggingHapticDriver()
        self.heading_source = heading_source
        self.haptic_config = haptic_config or load_haptic_config()
        self.heading_logger = heading_logger

        self.display_rotation = DisplayRotation.ROTATION_0
        self.paused = False
        self.last_update: Optional[HeadingUpdate] = None

    # ------------------------------------------------------------------
    # Inbound events
    # ------------------------------------------------------------------

    def on_sensor_changed(
        self, sensor_type: SensorType, values: Sequence[float]
    ) -> Optional[HeadingUpdate]:
        """Route one sample; returns the heading update when fusion produced one."""
        if self.paused:
            log.debug(f"Dropping {sensor_type} sample while paused")
            return None

        if len(values) < Config.AXIS_SIZE:
            log.warning(f"Ignoring {sensor_type} sample with {len(values)} values")
            return None
        triple = tuple(values[:Config.AXIS_SIZE])

        if sensor_type is SensorType.ACCELEROMETER:
            raw_azimuth = self.fusion.ingest_accelerometer(triple)
        elif sensor_type is SensorType.MAGNETIC_FIELD:
            raw_azimuth = self.fusion.ingest_magnetometer(triple)
        elif sensor_type is SensorType.ROTATION_VECTOR:
            raw_azimuth = self.fusion.ingest_rotation_vector(triple)
        else:
            log.warning(f"Unexpected sensor changed event of type {sensor_type}")
            return None

        if raw_azimuth is None:
            if self.heading_logger:
                self.heading_logger.fusion.debug(f"No fused azimuth after {sensor_type.value} sample")
            return None

        return self._update_heading(raw_azimuth)

    def on_accuracy_changed(self, sensor_type: SensorType, code: int) -> Optional[SensorAccuracy]:
        """Classify an accuracy event from the heading sensor and store it."""
        if sensor_type is not self.heading_source:
            log.warning(f"Unexpected accuracy changed event of type {sensor_type}")
            return None

        log.debug(f"Sensor accuracy value {code}")
        accuracy = accuracy_classifier.classify(code)
        self.monitor.update_accuracy(accuracy)
        return accuracy

    def set_display_rotation(self, rotation: Union[DisplayRotation, int]) -> None:
        if not isinstance(rotation, DisplayRotation):
            rotation = DisplayRotation.from_degrees(rotation)
        if rotation is not self.display_rotation:
            log.debug(f"Display rotation is {rotation.degrees}°")
        self.display_rotation = rotation

    def request_calibration(self) -> Azimuth:
        """Use the current heading as the reference for future alerts."""
        calibrated = Azimuth(self.monitor.calibrate())
        if self.heading_logger:
            self.heading_logger.alerts.info(f"Calibrated azimuth: {calibrated}")
        return calibrated

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def pause(self) -> None:
        """Stop accepting samples and forget the stored readings."""
        self.paused = True
        self.fusion.reset()
        log.info("Stopped compass")

    def resume(self) -> None:
        """Accept samples again, starting from a clean fusion state."""
        self.fusion.reset()
        self.paused = False
        log.info("Started compass")

    # ------------------------------------------------------------------
    # Outbound state
    # ------------------------------------------------------------------

    @property
    def current_azimuth(self) -> Azimuth:
        return Azimuth(self.monitor.current_azimuth)

    @property
    def accuracy(self) -> SensorAccuracy:
        return self.monitor.accuracy

    def _update_heading(self, raw_azimuth: float) -> HeadingUpdate:
        azimuth = compensate_for_display_rotation(raw_azimuth, self.display_rotation)
        decision = self.monitor.update_azimuth(azimuth)
        update = HeadingUpdate(
            azimuth=Azimuth(azimuth),
            decision=decision,
            deviation=self.monitor.last_deviation,
        )

        if self.heading_logger:
            self.heading_logger.fusion.debug(
                f"Raw {raw_azimuth:.2f}° -> {update.azimuth} "
                f"(display {self.display_rotation.degrees}°)"
            )

        if decision is AlertDecision.ALERT:
            if self.heading_logger:
                self.heading_logger.alerts.info(
                    f"Deviation {update.deviation:.1f}° from "
                    f"{self.monitor.calibration_azimuth:.1f}° -> ALERT"
                )
            self.haptic_driver.pulse(self.haptic_config)

        self.last_update = update
        return update
