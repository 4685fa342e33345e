"""Map platform sensor status codes onto SensorAccuracy."""

from __future__ import annotations

import logging

from compass.sensor.models import SensorAccuracy
from compass.utils.config import Config

log = logging.getLogger(__name__)

STATUS_CODE_TO_ACCURACY = {
    Config.SENSOR_STATUS_NO_CONTACT: SensorAccuracy.NO_CONTACT,
    Config.SENSOR_STATUS_UNRELIABLE: SensorAccuracy.UNRELIABLE,
    Config.SENSOR_STATUS_ACCURACY_LOW: SensorAccuracy.LOW,
    Config.SENSOR_STATUS_ACCURACY_MEDIUM: SensorAccuracy.MEDIUM,
    Config.SENSOR_STATUS_ACCURACY_HIGH: SensorAccuracy.HIGH,
}


def classify(code: int) -> SensorAccuracy:
    """Classify a status code; unknown codes fall back to NO_CONTACT."""
    accuracy = STATUS_CODE_TO_ACCURACY.get(code)
    if accuracy is None:
        log.warning(f"Encountered unexpected sensor accuracy value '{code}'")
        return SensorAccuracy.NO_CONTACT
    return accuracy
