from .device_writer import DeviceDataWriter

__all__ = ["DeviceDataWriter"]
