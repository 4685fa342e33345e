"""Tests for CompassSensorAdapter routing, haptics and lifecycle."""

from __future__ import annotations

import logging
import math

import pytest

from compass.hardware.haptic_driver import HapticDriver, LoggingHapticDriver
from compass.hardware.sensor_adapter import CompassSensorAdapter
from compass.heading.heading_monitor import AlertDecision
from compass.sensor.models import DisplayRotation, SensorAccuracy, SensorType
from compass.utils.config_sections import HapticConfig

FLAT_GRAVITY = (0.0, 0.0, 9.81)


def field_for_heading(heading: float):
    theta = math.radians(heading)
    return (-20.0 * math.sin(theta), 20.0 * math.cos(theta), -40.0)


def yaw_rotation_vector(heading: float):
    return (0.0, 0.0, math.sin(math.radians(-heading) / 2.0))


@pytest.fixture()
def haptics() -> LoggingHapticDriver:
    return LoggingHapticDriver()


@pytest.fixture()
def adapter(haptics: LoggingHapticDriver) -> CompassSensorAdapter:
    return CompassSensorAdapter(haptic_driver=haptics, heading_source=SensorType.MAGNETIC_FIELD)


def feed_pair(adapter: CompassSensorAdapter, heading: float):
    first = adapter.on_sensor_changed(SensorType.ACCELEROMETER, FLAT_GRAVITY)
    second = adapter.on_sensor_changed(SensorType.MAGNETIC_FIELD, field_for_heading(heading))
    return first, second


def test_end_to_end_calibrated_alert(adapter: CompassSensorAdapter, haptics: LoggingHapticDriver) -> None:
    adapter.set_display_rotation(90)

    first, second = feed_pair(adapter, 0.0)
    assert first is None
    assert second.azimuth.degrees == pytest.approx(90.0)

    feed_pair(adapter, 0.0)
    adapter.request_calibration()
    pulses_before = haptics.pulse_count

    _, steady = feed_pair(adapter, 0.0)
    assert steady.decision is AlertDecision.NO_ALERT
    assert steady.deviation == pytest.approx(0.0, abs=1e-6)

    _, shifted = feed_pair(adapter, 50.0)
    assert shifted.decision is AlertDecision.ALERT
    assert shifted.azimuth.degrees == pytest.approx(140.0)
    assert shifted.deviation == pytest.approx(50.0)
    assert haptics.pulse_count == pulses_before + 1


def test_alert_pulse_uses_configured_parameters(haptics: LoggingHapticDriver) -> None:
    adapter = CompassSensorAdapter(
        haptic_driver=haptics,
        haptic_config=HapticConfig(pulse_duration_ms=250, amplitude=128),
    )

    update = adapter.on_sensor_changed(SensorType.ROTATION_VECTOR, yaw_rotation_vector(90.0))

    assert update.decision is AlertDecision.ALERT
    assert haptics.pulses[-1].duration_ms == 250
    assert haptics.pulses[-1].amplitude == 128


def test_default_pulse_is_short_and_default_amplitude(haptics: LoggingHapticDriver) -> None:
    adapter = CompassSensorAdapter(haptic_driver=haptics)
    adapter.on_sensor_changed(SensorType.ROTATION_VECTOR, yaw_rotation_vector(180.0))

    assert haptics.pulses[-1].duration_ms == 100
    assert haptics.pulses[-1].amplitude == -1


def test_rotation_vector_path_with_display_rotation(haptics: LoggingHapticDriver) -> None:
    adapter = CompassSensorAdapter(haptic_driver=haptics)
    adapter.set_display_rotation(DisplayRotation.ROTATION_270)

    update = adapter.on_sensor_changed(SensorType.ROTATION_VECTOR, yaw_rotation_vector(100.0))

    assert update.azimuth.degrees == pytest.approx(10.0)
    assert update.decision is AlertDecision.NO_ALERT
    assert haptics.pulse_count == 0


def test_degenerate_sample_keeps_previous_azimuth(adapter: CompassSensorAdapter) -> None:
    feed_pair(adapter, 30.0)

    assert adapter.on_sensor_changed(SensorType.ACCELEROMETER, (0.0, 0.0, 0.1)) is None
    assert adapter.current_azimuth.degrees == pytest.approx(30.0)


def test_short_payload_is_ignored(adapter: CompassSensorAdapter, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert adapter.on_sensor_changed(SensorType.ACCELEROMETER, (0.0, 9.81)) is None
    assert "2 values" in caplog.text


def test_unknown_sensor_type_is_ignored(adapter: CompassSensorAdapter, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert adapter.on_sensor_changed("gyroscope", (0.0, 0.0, 0.0)) is None
    assert "Unexpected sensor changed event" in caplog.text


def test_extra_values_are_truncated(haptics: LoggingHapticDriver) -> None:
    adapter = CompassSensorAdapter(haptic_driver=haptics)
    values = yaw_rotation_vector(20.0) + (0.98, 0.5)

    update = adapter.on_sensor_changed(SensorType.ROTATION_VECTOR, values)

    assert update.azimuth.degrees == pytest.approx(20.0)


def test_accuracy_events(adapter: CompassSensorAdapter, caplog: pytest.LogCaptureFixture) -> None:
    assert adapter.accuracy is SensorAccuracy.NO_CONTACT

    assert adapter.on_accuracy_changed(SensorType.MAGNETIC_FIELD, 3) is SensorAccuracy.HIGH
    assert adapter.accuracy is SensorAccuracy.HIGH

    with caplog.at_level(logging.WARNING):
        assert adapter.on_accuracy_changed(SensorType.ACCELEROMETER, 0) is None
    assert adapter.accuracy is SensorAccuracy.HIGH

    assert adapter.on_accuracy_changed(SensorType.MAGNETIC_FIELD, 999) is SensorAccuracy.NO_CONTACT


def test_pause_resets_fusion_and_drops_samples(adapter: CompassSensorAdapter) -> None:
    feed_pair(adapter, 45.0)
    adapter.pause()

    assert adapter.on_sensor_changed(SensorType.MAGNETIC_FIELD, field_for_heading(60.0)) is None
    assert not adapter.fusion.accelerometer_reading.any()

    adapter.resume()
    assert adapter.on_sensor_changed(SensorType.MAGNETIC_FIELD, field_for_heading(60.0)) is None
    update = adapter.on_sensor_changed(SensorType.ACCELEROMETER, FLAT_GRAVITY)
    assert update.azimuth.degrees == pytest.approx(60.0)


def test_request_calibration_returns_reference(adapter: CompassSensorAdapter) -> None:
    feed_pair(adapter, 200.0)

    calibrated = adapter.request_calibration()

    assert calibrated.degrees == pytest.approx(200.0)
    assert calibrated.cardinal_direction == "S"
    assert adapter.monitor.calibration_azimuth == pytest.approx(200.0)


def test_last_update_tracks_latest_result(adapter: CompassSensorAdapter) -> None:
    _, update = feed_pair(adapter, 10.0)
    assert adapter.last_update is update


def test_base_haptic_driver_is_abstract() -> None:
    with pytest.raises(TypeError):
        HapticDriver()


def test_haptic_subclass_receives_pulse() -> None:
    class RecordingDriver(HapticDriver):
        def __init__(self) -> None:
            self.calls = []

        def vibrate(self, duration_ms: int, amplitude: int) -> None:
            self.calls.append((duration_ms, amplitude))

    driver = RecordingDriver()
    driver.pulse(HapticConfig(pulse_duration_ms=80, amplitude=200))

    assert driver.calls == [(80, 200)]


def test_end_to_end_upright_device_pair(adapter: CompassSensorAdapter, haptics: LoggingHapticDriver) -> None:
    upright_gravity = (0.0, 9.8, 0.0)
    field = (20.0, 0.0, 40.0)
    adapter.set_display_rotation(90)

    for _ in range(2):
        adapter.on_sensor_changed(SensorType.ACCELEROMETER, upright_gravity)
        reference = adapter.on_sensor_changed(SensorType.MAGNETIC_FIELD, field)
    assert reference is not None
    adapter.request_calibration()

    adapter.on_sensor_changed(SensorType.ACCELEROMETER, upright_gravity)
    steady = adapter.on_sensor_changed(SensorType.MAGNETIC_FIELD, field)
    assert steady.decision is AlertDecision.NO_ALERT
    assert steady.deviation == pytest.approx(0.0, abs=1e-6)

    # Shift the raw heading by +50° from wherever the upright pair landed
    raw_reference = reference.azimuth.degrees - 90.0
    pulses_before = haptics.pulse_count
    adapter.on_sensor_changed(SensorType.ACCELEROMETER, FLAT_GRAVITY)
    shifted = adapter.on_sensor_changed(
        SensorType.MAGNETIC_FIELD, field_for_heading(raw_reference + 50.0)
    )

    assert shifted.decision is AlertDecision.ALERT
    assert shifted.deviation == pytest.approx(50.0)
    assert haptics.pulse_count > pulses_before
