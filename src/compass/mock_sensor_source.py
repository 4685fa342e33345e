"""
Mock sensor source for compass testing without physical hardware.

This module provides a stand-in for the platform sensor callbacks by
generating synthetic readings for a device lying flat on a table:
1. Accelerometer + magnetometer pairs (raw fusion path)
2. Rotation vectors (pre-fused path)

Operating modes:
- 'sweep': The heading advances by a fixed step for every generated reading
- 'static': The heading stays at the start value (useful with noise enabled)

Usage:
    source = MockSensorSource(mode='sweep', sweep_step_deg=10.0)
    for sensor_type, values in source.events(36):
        adapter.on_sensor_changed(sensor_type, values)
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterator, Optional, Tuple

import numpy as np

from compass.sensor.angle_math import normalize
from compass.sensor.models import SensorType
from compass.utils.config import Config
from compass.utils.config_sections import MockSensorConfig, load_mock_sensor_config

log = logging.getLogger("MockSensorSource")

SensorEvent = Tuple[SensorType, Tuple[float, float, float]]

VALID_MODES = ("sweep", "static")


class MockSensorSource:
    """
    Synthetic sensor stream for a flat device turning about the vertical axis.

    See module docstring for usage examples.
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        *,
        use_rotation_vector: bool = False,
        config: Optional[MockSensorConfig] = None,
        **overrides,
    ) -> None:
        """
        Initialize the MockSensorSource.

        Args:
            mode: 'sweep' or 'static' (defaults to the configured mode)
            use_rotation_vector: Emit rotation vectors instead of accel/mag pairs
            config: Base configuration (loaded from Config if omitted)
            **overrides: Individual MockSensorConfig fields to replace
        """
        # replace() copies, so a caller's config is never modified
        config = dataclasses.replace(config or load_mock_sensor_config(), **overrides)
        if mode is not None:
            config = dataclasses.replace(config, mode=mode)
        if config.mode not in VALID_MODES:
            raise ValueError(f"Mode must be one of {VALID_MODES}, got '{config.mode}'")

        self.config = config
        self.use_rotation_vector = use_rotation_vector
        self.rng = np.random.default_rng(config.seed)
        self.sample_index = 0

        log.info(
            f"MockSensorSource initialized: mode={config.mode}, "
            f"rotation_vector={use_rotation_vector}, noise={config.noise_std}"
        )

    def heading_at(self, index: int) -> float:
        """True heading (degrees) of the simulated device for the index-th reading."""
        if self.config.mode == "static":
            return normalize(self.config.start_heading_deg)
        return normalize(self.config.start_heading_deg + index * self.config.sweep_step_deg)

    def events(self, count: int) -> Iterator[SensorEvent]:
        """Yield the sensor events for the next `count` headings."""
        for _ in range(count):
            heading = self.heading_at(self.sample_index)
            self.sample_index += 1
            if self.use_rotation_vector:
                yield SensorType.ROTATION_VECTOR, self.rotation_vector_for(heading)
            else:
                yield SensorType.ACCELEROMETER, self.accelerometer_for(heading)
                yield SensorType.MAGNETIC_FIELD, self.magnetometer_for(heading)

    def accelerometer_for(self, heading: float) -> Tuple[float, float, float]:
        # Flat device: gravity along +z regardless of heading
        return self._with_noise(np.array([0.0, 0.0, Config.STANDARD_GRAVITY]))

    def magnetometer_for(self, heading: float) -> Tuple[float, float, float]:
        theta = math.radians(heading)
        horizontal = self.config.field_horizontal_ut
        field = np.array([
            -horizontal * math.sin(theta),
            horizontal * math.cos(theta),
            self.config.field_vertical_ut,
        ])
        return self._with_noise(field)

    def rotation_vector_for(self, heading: float) -> Tuple[float, float, float]:
        # Signed half-angle keeps the quaternion's scalar part non-negative
        signed = heading - 360.0 if heading > 180.0 else heading
        half = math.radians(signed) / 2.0
        return self._with_noise(np.array([0.0, 0.0, -math.sin(half)]))

    def _with_noise(self, values: np.ndarray) -> Tuple[float, float, float]:
        if self.config.noise_std > 0.0:
            values = values + self.rng.normal(0.0, self.config.noise_std, size=values.shape)
        return tuple(float(v) for v in values)
