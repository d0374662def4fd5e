"""
Vendor handlers - per-vendor install and rollback routines
"""

import time
from pathlib import Path
from typing import Callable, Dict, Optional

from autodriver import config
from autodriver.backend.package_manager import DnfManager
from autodriver.backend.system_checker import SystemChecker
from autodriver.models.gpu_model import DriverType, GraphicsDevice, PipelineContext, Vendor
from autodriver.utils.logger import logger


def render_device_section(identifier: str, driver: str) -> str:
    """xorg.conf Device section binding a driver with TearFree enabled"""
    return (
        'Section "Device"\n'
        f'    Identifier "{identifier}"\n'
        f'    Driver "{driver}"\n'
        '    Option "TearFree" "true"\n'
        'EndSection\n'
    )


class VendorHandler:
    """Base class: install drivers for one vendor and undo them"""

    vendor = Vendor.UNKNOWN
    driver_type = DriverType.UNKNOWN

    def __init__(self, packages: DnfManager, system: SystemChecker,
                 fragment_dir: Path = config.XORG_CONF_D):
        self.packages = packages
        self.system = system
        self.fragment_dir = Path(fragment_dir)

    def install(self, device: GraphicsDevice, ctx: PipelineContext) -> bool:
        raise NotImplementedError

    def rollback(self, device: GraphicsDevice) -> None:
        """Restore the distribution default driver; no-op unless overridden"""

    def _write_fragment(self, name: str, identifier: str, driver: str,
                        ctx: PipelineContext) -> bool:
        path = self.fragment_dir / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(render_device_section(identifier, driver), encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            return False

        if path not in ctx.written_fragments:
            ctx.written_fragments.append(path)
        logger.info(f"Wrote {path}")
        return True


class NvidiaHandler(VendorHandler):
    """Proprietary NVIDIA driver via akmod from RPM Fusion"""

    vendor = Vendor.NVIDIA
    driver_type = DriverType.NVIDIA_PROPRIETARY
    module_name = "nvidia"

    def __init__(self, packages: DnfManager, system: SystemChecker,
                 fragment_dir: Path = config.XORG_CONF_D,
                 wait_timeout: float = config.MODULE_BUILD_TIMEOUT,
                 poll_interval: float = config.MODULE_POLL_INTERVAL,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__(packages, system, fragment_dir)
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock

    def install(self, device: GraphicsDevice, ctx: PipelineContext) -> bool:
        logger.info(f"Installing NVIDIA drivers for {device.full_name}...")

        if not ctx.repositories_enabled:
            logger.error("RPM Fusion repositories are not enabled - cannot install NVIDIA drivers")
            return False

        if not self.packages.install(*config.NVIDIA_PACKAGES):
            logger.error("Failed to install NVIDIA driver packages")
            return False

        if not self.wait_for_module():
            logger.warning(f"NVIDIA kernel module '{self.module_name}' is not loaded")
            return False

        if not self.system.run_tool(['nvidia-xconfig']):
            logger.warning("nvidia-xconfig failed - keeping the existing X configuration")

        logger.info(f"✓ NVIDIA drivers installed for {device.full_name}")
        return True

    def wait_for_module(self) -> bool:
        """
        Poll until the akmod-built module shows up in lsmod

        Returns:
            bool: True as soon as the module is loaded, False once
            wait_timeout has passed without it appearing
        """
        logger.info(f"Waiting up to {self.wait_timeout}s for the NVIDIA kernel module to build...")

        deadline = self._clock() + self.wait_timeout
        while True:
            if self.system.is_module_loaded(self.module_name):
                logger.info(f"Kernel module '{self.module_name}' loaded")
                return True
            remaining = deadline - self._clock()
            if remaining <= 0:
                return False
            self._sleep(min(self.poll_interval, remaining))

    def rollback(self, device: GraphicsDevice) -> None:
        logger.info(f"Restoring nouveau for {device.full_name}...")
        self.packages.remove(*config.NVIDIA_ROLLBACK_REMOVE)
        self.packages.install(*config.NVIDIA_FALLBACK_PACKAGES)


class AmdHandler(VendorHandler):
    """Open amdgpu + Mesa stack"""

    vendor = Vendor.AMD
    driver_type = DriverType.AMD_OPEN

    def install(self, device: GraphicsDevice, ctx: PipelineContext) -> bool:
        logger.info(f"Installing AMD drivers for {device.full_name}...")

        if not self.packages.install(*config.AMD_PACKAGES):
            logger.error("Failed to install AMD driver packages")
            return False

        if not self._write_fragment(config.AMD_FRAGMENT_NAME, "AMD", "amdgpu", ctx):
            return False

        logger.info(f"✓ AMD drivers installed for {device.full_name}")
        return True

    def rollback(self, device: GraphicsDevice) -> None:
        logger.info(f"Reinstalling default Mesa/amdgpu stack for {device.full_name}...")
        self.packages.reinstall(*config.AMD_ROLLBACK_PACKAGES)


class IntelHandler(VendorHandler):
    """Open Intel stack; rollback needs no package changes"""

    vendor = Vendor.INTEL
    driver_type = DriverType.INTEL_OPEN

    def install(self, device: GraphicsDevice, ctx: PipelineContext) -> bool:
        logger.info(f"Installing Intel drivers for {device.full_name}...")

        if not self.packages.install(*config.INTEL_PACKAGES):
            logger.error("Failed to install Intel driver packages")
            return False

        if not self._write_fragment(config.INTEL_FRAGMENT_NAME, "Intel Graphics", "intel", ctx):
            return False

        logger.info(f"✓ Intel drivers installed for {device.full_name}")
        return True


HANDLER_CLASSES = {
    Vendor.NVIDIA: NvidiaHandler,
    Vendor.AMD: AmdHandler,
    Vendor.INTEL: IntelHandler,
}


def build_handlers(packages: DnfManager, system: SystemChecker,
                   fragment_dir: Path = config.XORG_CONF_D,
                   nvidia_options: Optional[dict] = None) -> Dict[Vendor, VendorHandler]:
    """Instantiate one handler per supported vendor; UNKNOWN has none"""
    handlers = {}
    for vendor, handler_cls in HANDLER_CLASSES.items():
        kwargs = dict(nvidia_options or {}) if handler_cls is NvidiaHandler else {}
        handlers[vendor] = handler_cls(packages, system, fragment_dir, **kwargs)
    return handlers
