"""Device discovery."""

from beatshelf.core.device.locator import locate_device
from beatshelf.core.device.models import DeviceHandle

__all__ = ["DeviceHandle", "locate_device"]
