"""
Compass heading engine

Fuses orientation sensor samples into a compass azimuth, corrects it for the
display rotation and decides when the heading strays from a calibrated
reference far enough to vibrate the device.

Components:
- sensor: angle math, sensor fusion, accuracy classification
- heading: HeadingMonitor (calibration + deviation alerts)
- hardware: sensor adapter and haptic driver seam
"""
