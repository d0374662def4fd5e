"""
Current driver probe - which kernel module drives a GPU right now
"""

from typing import Dict, Optional, Tuple

from autodriver.backend.system_checker import SystemChecker
from autodriver.models.gpu_model import Vendor

UNKNOWN_DRIVER = "unknown"

# Open-source module first: it wins when both could be reported
PROBE_ORDER: Dict[Vendor, Tuple[str, ...]] = {
    Vendor.NVIDIA: ('nouveau', 'nvidia'),
    Vendor.AMD: ('amdgpu', 'radeon'),
}

# Vendors with a single modelled driver, reported without looking at lsmod
FIXED_DRIVERS: Dict[Vendor, str] = {
    Vendor.INTEL: 'intel',
}


class DriverProbe:
    """Maps a vendor ID to the module currently loaded for it"""

    def __init__(self, system: Optional[SystemChecker] = None):
        self.system = system or SystemChecker()

    def probe_driver(self, vendor_id: str) -> str:
        vendor = Vendor.from_vendor_id(vendor_id)

        if vendor in FIXED_DRIVERS:
            return FIXED_DRIVERS[vendor]

        candidates = PROBE_ORDER.get(vendor)
        if not candidates:
            return UNKNOWN_DRIVER

        loaded = self.system.loaded_modules()
        for module in candidates:
            if module in loaded:
                return module

        return UNKNOWN_DRIVER
