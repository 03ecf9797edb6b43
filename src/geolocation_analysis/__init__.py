"""
Device geolocation analysis.

Estimates a device position from GNSS, IP or WiFi telemetry with AWS IoT
Wireless and writes the estimated_location record back to the device.
"""

__version__ = "1.0.0"
