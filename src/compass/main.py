#!/usr/bin/env python3
"""
Headless compass demo.

Drives the mock sensor source through the sensor adapter and prints one line
per fused heading, marking the samples that would vibrate the device.

Flow:
1. Build fusion, monitor and adapter
2. Stream synthetic samples (accel/mag pairs or rotation vectors)
3. Calibrate at the requested sample
4. Report alerts and the haptic pulse count
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from compass.hardware.haptic_driver import LoggingHapticDriver
from compass.hardware.sensor_adapter import CompassSensorAdapter
from compass.heading.heading_monitor import AlertDecision
from compass.mock_sensor_source import VALID_MODES, MockSensorSource
from compass.sensor.models import SensorType
from compass.telemetry.loggers.heading_logger import close_heading_logger, get_heading_logger
from compass.utils.config import Config


def parse_args(argv: Optional[List[str]] = None):
    ap = argparse.ArgumentParser(description="Compass heading + deviation alert demo")
    ap.add_argument("--mode", choices=VALID_MODES, default=Config.MOCK_MODE, help="Mock sensor mode")
    ap.add_argument("--samples", type=int, default=36, help="Number of headings to generate")
    ap.add_argument("--step", type=float, default=Config.MOCK_SWEEP_STEP_DEG, help="Degrees per sample in sweep mode")
    ap.add_argument("--noise", type=float, default=Config.MOCK_NOISE_STD, help="Gaussian noise std on every axis")
    ap.add_argument("--rotation", type=int, choices=(0, 90, 180, 270), default=0, help="Display rotation in degrees")
    ap.add_argument("--rotation-vector", action="store_true", help="Use the pre-fused rotation vector path")
    ap.add_argument("--calibrate-at", type=int, default=0, help="Calibrate once this many headings have been generated")
    ap.add_argument("--log-dir", type=Path, default=None, help="Write session logs to this directory")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging on the console")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    heading_logger = get_heading_logger(args.log_dir) if args.log_dir else None
    haptics = LoggingHapticDriver()
    adapter = CompassSensorAdapter(
        haptic_driver=haptics,
        heading_source=SensorType.ROTATION_VECTOR if args.rotation_vector else SensorType.MAGNETIC_FIELD,
        heading_logger=heading_logger,
    )
    adapter.set_display_rotation(args.rotation)

    source = MockSensorSource(
        args.mode,
        use_rotation_vector=args.rotation_vector,
        sweep_step_deg=args.step,
        noise_std=args.noise,
    )

    alerts = 0
    updates = 0
    try:
        adapter.resume()
        for sensor_type, values in source.events(args.samples):
            update = adapter.on_sensor_changed(sensor_type, values)
            # The accelerometer half of a pair never completes a heading
            completes_heading = sensor_type is not SensorType.ACCELEROMETER
            heading = source.sample_index

            if update is not None:
                updates += 1
                marker = "  <-- ALERT" if update.decision is AlertDecision.ALERT else ""
                if update.decision is AlertDecision.ALERT:
                    alerts += 1
                print(f"{heading:4d}  {update.azimuth}  deviation {update.deviation:6.1f}°{marker}")

            if completes_heading and heading == args.calibrate_at:
                print(f"      calibrated at {adapter.request_calibration()}")
        adapter.pause()
    finally:
        if heading_logger:
            close_heading_logger()

    print(
        f"{source.sample_index} headings, {updates} updates, "
        f"{alerts} alerts, {haptics.pulse_count} haptic pulses"
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
