"""
Rollback Manager - returns the system to its pre-install configuration
"""

import shutil
from pathlib import Path
from typing import Dict, Optional

from autodriver import config
from autodriver.backend.vendors import VendorHandler
from autodriver.models.gpu_model import BackupSnapshot, PipelineContext, Vendor
from autodriver.utils.logger import logger


class RollbackManager:
    """
    Best-effort restore; individual steps log failures and carry on

    Only what this run's BackupSnapshot recorded is restored. Files left in
    the backup directory by earlier runs are never read.
    """

    def __init__(self, handlers: Dict[Vendor, VendorHandler],
                 xorg_conf: Path = config.XORG_CONF):
        self.handlers = handlers
        self.xorg_conf = Path(xorg_conf)

    def rollback(self, ctx: PipelineContext) -> None:
        logger.info("Restoring default drivers...")

        self.restore_xorg_conf(ctx.backup)
        self.restore_fragments(ctx)

        for device in ctx.devices:
            handler: Optional[VendorHandler] = self.handlers.get(device.vendor)
            if handler is not None:
                handler.rollback(device)

        logger.info("Default drivers restored")

    def restore_xorg_conf(self, backup: Optional[BackupSnapshot]) -> bool:
        """Copy the backed-up xorg.conf back, only if both copies exist"""
        saved = backup.xorg_conf if backup else None
        if saved is None or not (saved.exists() and self.xorg_conf.exists()):
            logger.debug("No xorg.conf to restore")
            return False

        try:
            shutil.copy2(saved, self.xorg_conf)
        except OSError as e:
            logger.error(f"Failed to restore {self.xorg_conf}: {e}")
            return False

        logger.info(f"Restored {self.xorg_conf}")
        return True

    def restore_fragments(self, ctx: PipelineContext) -> None:
        """Put back or delete the config fragments written during this run"""
        fragment_backup = ctx.backup.xorg_conf_d if ctx.backup else None

        for fragment in ctx.written_fragments:
            saved = fragment_backup / fragment.name if fragment_backup else None
            try:
                if saved is not None and saved.exists():
                    shutil.copy2(saved, fragment)
                    logger.info(f"Restored {fragment}")
                elif fragment.exists():
                    fragment.unlink()
                    logger.info(f"Removed {fragment}")
            except OSError as e:
                logger.error(f"Failed to restore {fragment}: {e}")
