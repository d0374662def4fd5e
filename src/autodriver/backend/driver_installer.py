"""
Driver Installer - runs the vendor handler for every detected device
"""

from typing import Dict

from autodriver.backend.vendors import VendorHandler
from autodriver.models.gpu_model import InstallOutcome, PipelineContext, Vendor
from autodriver.utils.logger import logger


class DriverInstaller:
    """Dispatches each device to its vendor handler and aggregates results"""

    def __init__(self, handlers: Dict[Vendor, VendorHandler]):
        self.handlers = handlers

    def install_drivers(self, ctx: PipelineContext) -> bool:
        """
        Install drivers for every device in the context

        Devices without a handler are skipped and produce no outcome. A
        failing device does not stop the remaining ones.

        Returns:
            bool: True only if every attempted device succeeded
        """
        logger.info("Starting driver installation...")

        for device in ctx.devices:
            handler = self.handlers.get(device.vendor)
            if handler is None:
                logger.warning(f"Unknown GPU vendor for [{device.pci_id}] {device.model} - skipping")
                continue

            succeeded = handler.install(device, ctx)
            ctx.outcomes.append(InstallOutcome(device, succeeded, handler.driver_type))
            if not succeeded:
                logger.warning(f"Driver installation failed for {device.full_name}")

        if ctx.install_succeeded:
            logger.info("✓ Driver installation completed")
        else:
            logger.error(f"Driver installation finished with {len(ctx.failed_outcomes)} failure(s)")

        return ctx.install_succeeded
