"""
GPU Detection
Enumerates display-class PCI devices and resolves their vendors
"""

import re
from typing import List, Optional

from autodriver.backend.driver_probe import DriverProbe
from autodriver.backend.system_checker import SystemChecker
from autodriver.models.gpu_model import GraphicsDevice, Vendor
from autodriver.utils.logger import logger

# lspci -nn class descriptions that denote a display controller
DISPLAY_CLASS_PATTERN = re.compile(
    r'(VGA compatible controller|3D controller|Display controller)'
)

# [vendor:device] pair, then an optional ": description" after it
IDS_PATTERN = re.compile(
    r'\[([0-9a-fA-F]{4}):([0-9a-fA-F]{4})\](?:\s*\(rev [0-9a-fA-F]+\))?(?::\s*(.+))?'
)

# Human-readable name between the class and the ID pair
NAME_PATTERN = re.compile(r'controller[^:]*:\s*(.+?)\s*\[[0-9a-fA-F]{4}:[0-9a-fA-F]{4}\]')


class GPUDetector:
    """Detects GPUs via lspci"""

    def __init__(self, system: Optional[SystemChecker] = None,
                 probe: Optional[DriverProbe] = None):
        self.system = system or SystemChecker()
        self.probe = probe or DriverProbe(self.system)

    def enumerate(self) -> List[GraphicsDevice]:
        """
        Scan the PCI bus once

        Returns:
            Devices in lspci order; the first one is flagged primary.
            Empty if nothing matched, which callers treat as fatal.
        """
        logger.info("Detecting graphics devices...")

        devices: List[GraphicsDevice] = []
        for line in self.system.list_pci_devices().splitlines():
            parsed = self.parse_lspci_line(line)
            if parsed is None:
                continue

            vendor_id, device_id, model = parsed
            device = GraphicsDevice(
                pci_id=f"{vendor_id}:{device_id}",
                vendor=Vendor.from_vendor_id(vendor_id),
                model=model,
                current_driver=self.probe.probe_driver(vendor_id),
                is_primary=not devices
            )
            devices.append(device)
            logger.info(f"Detected GPU: {device.full_name} [{device.pci_id}] "
                        f"(driver: {device.current_driver}, primary: {device.is_primary})")

        if not devices:
            logger.error("No graphics devices detected")

        return devices

    @staticmethod
    def parse_lspci_line(line: str):
        """
        Parse a single lspci -nn line
        Format: 01:00.0 VGA compatible controller [0300]: NVIDIA Corporation GP107 [10de:1c81] (rev a1)

        Returns:
            (vendor_id, device_id, model) or None for non-display lines
        """
        if not DISPLAY_CLASS_PATTERN.search(line):
            return None

        # The class code "[0300]" has no colon, so the first match is the ID pair
        ids_match = IDS_PATTERN.search(line)
        if not ids_match:
            logger.debug(f"Display line without vendor:device IDs: {line}")
            return None

        vendor_id = ids_match.group(1).lower()
        device_id = ids_match.group(2).lower()

        model = ids_match.group(3)
        if not model:
            name_match = NAME_PATTERN.search(line)
            model = name_match.group(1) if name_match else None

        return vendor_id, device_id, (model.strip() if model else "Unknown Model")
