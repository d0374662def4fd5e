"""
Data model for detected graphics devices and install results
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from autodriver import config


class Vendor(Enum):
    """GPU manufacturer resolved from the PCI vendor ID"""

    NVIDIA = "NVIDIA"
    AMD = "AMD"
    INTEL = "Intel"
    UNKNOWN = "Unknown"

    @classmethod
    def from_vendor_id(cls, vendor_id: str) -> "Vendor":
        """Exact lookup in the vendor table, anything else is UNKNOWN"""
        return VENDOR_IDS.get(vendor_id.lower(), cls.UNKNOWN)


VENDOR_IDS = {
    config.GPU_VENDOR_NVIDIA: Vendor.NVIDIA,
    config.GPU_VENDOR_AMD: Vendor.AMD,
    config.GPU_VENDOR_INTEL: Vendor.INTEL,
}


class DriverType(Enum):
    """Driver stack a vendor handler installs"""

    NVIDIA_PROPRIETARY = "nvidia-proprietary"
    AMD_OPEN = "amdgpu"
    INTEL_OPEN = "intel"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class GraphicsDevice:
    """One display adapter captured during enumeration"""

    pci_id: str  # e.g., "10de:1c03"
    vendor: Vendor
    model: str = "Unknown Model"
    current_driver: str = "unknown"
    is_primary: bool = False

    @property
    def vendor_id(self) -> str:
        return self.pci_id.split(':', 1)[0]

    @property
    def device_id(self) -> str:
        return self.pci_id.split(':', 1)[1]

    @property
    def full_name(self) -> str:
        """Get full GPU name"""
        return f"{self.vendor.value} {self.model}"


@dataclass(frozen=True)
class InstallOutcome:
    """Result of installing drivers for a single device"""

    device: GraphicsDevice
    succeeded: bool
    driver_type: DriverType = DriverType.UNKNOWN


@dataclass
class BackupSnapshot:
    """
    What the backup step managed to capture

    Paths are None when the source did not exist or could not be copied;
    every copy failure is also recorded in ``failures``.
    """

    backup_dir: Path
    xorg_conf: Optional[Path] = None
    xorg_conf_d: Optional[Path] = None
    modules_list: Optional[Path] = None
    failures: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


@dataclass
class PipelineContext:
    """State handed from one pipeline stage to the next"""

    devices: Tuple[GraphicsDevice, ...] = ()
    backup: Optional[BackupSnapshot] = None
    repositories_enabled: bool = False
    outcomes: List[InstallOutcome] = field(default_factory=list)
    written_fragments: List[Path] = field(default_factory=list)

    @property
    def failed_outcomes(self) -> List[InstallOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def install_succeeded(self) -> bool:
        """All attempted devices installed; skipped devices do not count"""
        return all(outcome.succeeded for outcome in self.outcomes)
