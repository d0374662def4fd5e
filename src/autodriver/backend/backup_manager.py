"""
Backup Manager - snapshots display configuration before any driver change
"""

import shutil
from pathlib import Path
from typing import Optional

from autodriver import config
from autodriver.backend.system_checker import SystemChecker
from autodriver.models.gpu_model import BackupSnapshot
from autodriver.utils.logger import logger

XORG_CONF_BACKUP = "xorg.conf"
XORG_CONF_D_BACKUP = "xorg.conf.d"
MODULES_BACKUP = "lsmod.txt"


class BackupManager:
    """Copies xorg configuration and the module list to a fixed location"""

    def __init__(self, system: Optional[SystemChecker] = None,
                 backup_dir: Path = config.BACKUP_DIR,
                 xorg_conf: Path = config.XORG_CONF,
                 xorg_conf_d: Path = config.XORG_CONF_D):
        self.system = system or SystemChecker()
        self.backup_dir = Path(backup_dir)
        self.xorg_conf = Path(xorg_conf)
        self.xorg_conf_d = Path(xorg_conf_d)

    def create_backup(self) -> BackupSnapshot:
        """
        Best-effort snapshot, overwriting the previous one

        Missing sources are skipped silently. Copy failures are logged as
        warnings and listed in the snapshot, they never raise.
        """
        logger.info(f"Creating configuration backup in {self.backup_dir}...")
        snapshot = BackupSnapshot(backup_dir=self.backup_dir)

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create backup directory: {e}")
            snapshot.failures.append(f"backup directory: {e}")
            return snapshot

        self._clear_previous(snapshot)

        if self.xorg_conf.exists():
            target = self.backup_dir / XORG_CONF_BACKUP
            try:
                shutil.copy2(self.xorg_conf, target)
                snapshot.xorg_conf = target
                logger.debug(f"Backed up {self.xorg_conf}")
            except OSError as e:
                logger.warning(f"Could not back up {self.xorg_conf}: {e}")
                snapshot.failures.append(f"{self.xorg_conf}: {e}")

        if self.xorg_conf_d.is_dir():
            target = self.backup_dir / XORG_CONF_D_BACKUP
            try:
                shutil.copytree(self.xorg_conf_d, target)
                snapshot.xorg_conf_d = target
                logger.debug(f"Backed up {self.xorg_conf_d}")
            except (OSError, shutil.Error) as e:
                logger.warning(f"Could not back up {self.xorg_conf_d}: {e}")
                snapshot.failures.append(f"{self.xorg_conf_d}: {e}")

        # Captured unconditionally, even when lsmod returns nothing
        target = self.backup_dir / MODULES_BACKUP
        try:
            target.write_text(self.system.lsmod(), encoding='utf-8')
            snapshot.modules_list = target
        except OSError as e:
            logger.warning(f"Could not save loaded module list: {e}")
            snapshot.failures.append(f"{target}: {e}")

        if snapshot.complete:
            logger.info("✓ Backup created")
        else:
            logger.warning(f"Backup is incomplete ({len(snapshot.failures)} item(s) failed)")

        return snapshot

    def _clear_previous(self, snapshot: BackupSnapshot) -> None:
        """Delete the last run's artifacts so the directory holds only this run"""
        for name in (XORG_CONF_BACKUP, XORG_CONF_D_BACKUP, MODULES_BACKUP):
            stale = self.backup_dir / name
            try:
                if stale.is_dir() and not stale.is_symlink():
                    shutil.rmtree(stale)
                elif stale.exists() or stale.is_symlink():
                    stale.unlink()
            except OSError as e:
                logger.warning(f"Could not remove previous backup {stale}: {e}")
                snapshot.failures.append(f"{stale}: {e}")
