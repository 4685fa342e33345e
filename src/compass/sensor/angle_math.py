"""
Angle utilities for compass headings.

All angles handled here are in degrees unless a name says otherwise. Stored
and returned azimuths live in [0, 360); comparisons between two headings go
through circular_difference so the 359° -> 1° wraparound reads as 2°.

Rotation matrices are 3x3, row-major, mapping device coordinates to the
world frame (East, North, Up). The yaw extraction follows the usual
orientation decomposition: azimuth = atan2(R[0][1], R[1][1]).

Usage:
    from compass.sensor import angle_math

    matrix = angle_math.rotation_matrix_from_vectors(accel, mag)
    if matrix is not None:
        azimuth = angle_math.azimuth_from_rotation_matrix(matrix)
        azimuth = angle_math.compensate_for_display_rotation(azimuth, rotation)
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from compass.sensor.models import DisplayRotation
from compass.utils.config import Config
from compass.utils.config_sections import FusionConfig

FULL_CIRCLE = 360.0
HALF_CIRCLE = 180.0


def normalize(angle: float) -> float:
    """Wrap any real angle into [0, 360)."""
    normalized = float(angle) % FULL_CIRCLE
    # Tiny negative inputs round up to exactly 360.0
    if normalized >= FULL_CIRCLE:
        normalized = 0.0
    return normalized


def circular_difference(a: float, b: float) -> float:
    """Shortest unsigned distance between two headings, in [0, 180]."""
    difference = abs(normalize(a) - normalize(b))
    if difference > HALF_CIRCLE:
        difference = abs(FULL_CIRCLE - difference)
    return difference


def rotation_matrix_from_vectors(
    gravity: Sequence[float],
    geomagnetic: Sequence[float],
    config: Optional[FusionConfig] = None,
) -> Optional[np.ndarray]:
    """
    Build the device rotation matrix from gravity and geomagnetic vectors.

    Rows are East (H = E x A), North (M = A x H) and Up (A), each unit length.

    Args:
        gravity: Accelerometer reading [ax, ay, az] in m/s²
        geomagnetic: Magnetometer reading [mx, my, mz] in μT
        config: Degeneracy limits (defaults to FusionConfig())

    Returns:
        3x3 rotation matrix, or None when the readings are degenerate
        (free fall, no magnetic field, or vectors nearly collinear)
    """
    config = config or FusionConfig()
    a = np.asarray(gravity, dtype=np.float64)
    e = np.asarray(geomagnetic, dtype=np.float64)

    norm_sq_a = float(np.dot(a, a))
    if norm_sq_a < config.free_fall_gravity_squared:
        return None

    h = np.cross(e, a)
    norm_h = float(np.linalg.norm(h))
    if norm_h < config.min_geomagnetic_norm:
        return None

    h = h / norm_h
    a = a / math.sqrt(norm_sq_a)
    m = np.cross(a, h)

    return np.vstack((h, m, a))


def rotation_matrix_from_vector(rotation_vector: Sequence[float]) -> np.ndarray:
    """
    Convert a rotation vector (x, y, z of a unit quaternion) into a 3x3 matrix.

    The scalar part is recovered as sqrt(1 - x² - y² - z²), clamped at zero
    when sensor noise pushes the vector norm slightly above one.
    """
    q1, q2, q3 = (float(v) for v in rotation_vector)
    q0_sq = 1.0 - q1 * q1 - q2 * q2 - q3 * q3
    q0 = math.sqrt(q0_sq) if q0_sq > 0.0 else 0.0

    sq_q1 = 2.0 * q1 * q1
    sq_q2 = 2.0 * q2 * q2
    sq_q3 = 2.0 * q3 * q3
    q1_q2 = 2.0 * q1 * q2
    q3_q0 = 2.0 * q3 * q0
    q1_q3 = 2.0 * q1 * q3
    q2_q0 = 2.0 * q2 * q0
    q2_q3 = 2.0 * q2 * q3
    q1_q0 = 2.0 * q1 * q0

    return np.array(
        [
            [1.0 - sq_q2 - sq_q3, q1_q2 - q3_q0, q1_q3 + q2_q0],
            [q1_q2 + q3_q0, 1.0 - sq_q1 - sq_q3, q2_q3 - q1_q0],
            [q1_q3 - q2_q0, q2_q3 + q1_q0, 1.0 - sq_q1 - sq_q2],
        ]
    )


def azimuth_from_rotation_matrix(matrix) -> float:
    """Yaw of a 3x3 (or flat 9-element) rotation matrix in degrees, [0, 360)."""
    r = np.asarray(matrix, dtype=np.float64)
    if r.size != Config.ROTATION_MATRIX_SIZE:
        raise ValueError(
            f"Rotation matrix must have {Config.ROTATION_MATRIX_SIZE} elements, got {r.size}"
        )
    r = r.reshape(3, 3)

    azimuth_rad = math.atan2(r[0, 1], r[1, 1])
    return normalize(math.degrees(azimuth_rad))


def compensate_for_display_rotation(azimuth: float, rotation: DisplayRotation) -> float:
    """Shift a body-frame azimuth by the current screen rotation."""
    return normalize(azimuth + rotation.degrees)
