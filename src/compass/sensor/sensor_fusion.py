"""
Accelerometer + magnetometer fusion into a raw compass azimuth.

The fusion keeps only the most recent reading per source. Each new sample
overwrites its slot in place and triggers a fused update; when the pair is
not usable yet (startup, free fall, magnetic interference) the update
returns None and the caller simply waits for the next sample.

Platforms that deliver a pre-fused rotation vector can skip the pair and
use ingest_rotation_vector instead.

Usage:
    fusion = SensorFusion()
    fusion.ingest_accelerometer(SensorSample(0.0, 0.0, 9.81))
    azimuth = fusion.ingest_magnetometer(SensorSample(0.0, 20.0, -40.0))
    if azimuth is not None:
        # Raw body-frame azimuth in degrees
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from compass.sensor import angle_math
from compass.utils.config import Config
from compass.utils.config_sections import FusionConfig, load_fusion_config

log = logging.getLogger(__name__)


class SensorFusion:
    """Derive the raw azimuth from the latest accelerometer/magnetometer pair."""

    def __init__(self, config: Optional[FusionConfig] = None) -> None:
        self.config = config or load_fusion_config()
        self.accelerometer_reading = np.zeros(Config.AXIS_SIZE)
        self.magnetometer_reading = np.zeros(Config.AXIS_SIZE)

    def ingest_accelerometer(self, sample: Sequence[float]) -> Optional[float]:
        """Store an accelerometer reading and try a fused update."""
        if not self._store(self.accelerometer_reading, sample, "accelerometer"):
            return None
        return self._update_azimuth()

    def ingest_magnetometer(self, sample: Sequence[float]) -> Optional[float]:
        """Store a magnetometer reading and try a fused update."""
        if not self._store(self.magnetometer_reading, sample, "magnetometer"):
            return None
        return self._update_azimuth()

    def ingest_rotation_vector(self, vector: Sequence[float]) -> Optional[float]:
        """Compute the azimuth from a single pre-fused rotation vector."""
        values = self._as_triple(vector, "rotation vector")
        if values is None:
            return None
        matrix = angle_math.rotation_matrix_from_vector(values)
        return angle_math.azimuth_from_rotation_matrix(matrix)

    def reset(self) -> None:
        """Drop both stored readings."""
        self.accelerometer_reading.fill(0.0)
        self.magnetometer_reading.fill(0.0)
        log.debug("Sensor fusion readings cleared")

    def _store(self, target: np.ndarray, sample: Sequence[float], source: str) -> bool:
        values = self._as_triple(sample, source)
        if values is None:
            return False
        target[:] = values
        return True

    def _as_triple(self, sample: Sequence[float], source: str) -> Optional[np.ndarray]:
        values = np.asarray(list(sample), dtype=np.float64)
        if values.shape != (Config.AXIS_SIZE,):
            raise ValueError(
                f"{source} sample must have {Config.AXIS_SIZE} components, got {values.size}"
            )
        if not np.all(np.isfinite(values)):
            log.debug(f"Ignoring non-finite {source} sample: {values}")
            return None
        return values

    def _update_azimuth(self) -> Optional[float]:
        matrix = angle_math.rotation_matrix_from_vectors(
            self.accelerometer_reading,
            self.magnetometer_reading,
            self.config,
        )
        if matrix is None:
            return None
        return angle_math.azimuth_from_rotation_matrix(matrix)
