"""Haptic output used to signal a heading deviation alert."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from compass.utils.config_sections import HapticConfig, load_haptic_config

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HapticPulse:
    duration_ms: int
    amplitude: int
    timestamp: float


class HapticDriver(ABC):
    """Interface for a device vibrator. Subclasses deliver a one-shot pulse."""

    @abstractmethod
    def vibrate(self, duration_ms: int, amplitude: int) -> None:
        """Vibrate once for `duration_ms`; amplitude -1 is the platform default."""

    def pulse(self, config: Optional[HapticConfig] = None) -> None:
        """Fire the configured alert pulse (~100 ms, default amplitude)."""
        config = config or load_haptic_config()
        self.vibrate(config.pulse_duration_ms, config.amplitude)


class LoggingHapticDriver(HapticDriver):
    """
    Haptic driver for headless runs and tests.

    Records every pulse instead of touching hardware, so callers can inspect
    how many alerts reached the vibrator.
    """

    def __init__(self) -> None:
        self.pulses: List[HapticPulse] = []

    def vibrate(self, duration_ms: int, amplitude: int) -> None:
        self.pulses.append(HapticPulse(duration_ms, amplitude, time.time()))
        log.debug(f"Vibrated {duration_ms} ms (amplitude {amplitude})")

    @property
    def pulse_count(self) -> int:
        return len(self.pulses)
