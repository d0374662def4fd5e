"""
Driver installation pipeline

detect -> probe -> backup -> repositories -> install -> verify -> (rollback)

Assumes a single running instance; there is no lock file.
"""

from pathlib import Path
from typing import Optional

from autodriver import config
from autodriver.backend.backup_manager import BackupManager
from autodriver.backend.driver_installer import DriverInstaller
from autodriver.backend.gpu_detector import GPUDetector
from autodriver.backend.package_manager import DnfManager
from autodriver.backend.repo_manager import RepositoryManager
from autodriver.backend.rollback_manager import RollbackManager
from autodriver.backend.system_checker import SystemChecker
from autodriver.backend.vendors import build_handlers
from autodriver.backend.verifier import DisplayVerifier
from autodriver.models.gpu_model import PipelineContext
from autodriver.utils.logger import logger

EXIT_OK = 0
EXIT_FAILURE = 1


class DriverPipeline:
    """Wires the stages together; every stage takes and fills a PipelineContext"""

    def __init__(self, system: Optional[SystemChecker] = None,
                 packages: Optional[DnfManager] = None,
                 backup_dir: Path = config.BACKUP_DIR,
                 xorg_conf: Path = config.XORG_CONF,
                 xorg_conf_d: Path = config.XORG_CONF_D,
                 strict_backup: bool = False,
                 nvidia_options: Optional[dict] = None,
                 repositories: Optional[RepositoryManager] = None):
        self.system = system or SystemChecker()
        self.packages = packages or DnfManager()
        self.strict_backup = strict_backup

        handlers = build_handlers(self.packages, self.system, xorg_conf_d, nvidia_options)

        self.detector = GPUDetector(self.system)
        self.backups = BackupManager(self.system, backup_dir, xorg_conf, xorg_conf_d)
        self.repositories = repositories or RepositoryManager(self.packages, self.system)
        self.installer = DriverInstaller(handlers)
        self.verifier = DisplayVerifier(self.system)
        self.rollbacks = RollbackManager(handlers, xorg_conf)

    def initialize(self) -> Optional[PipelineContext]:
        """
        Run every step that happens before the first package change

        Returns:
            The populated context, or None on a precondition failure
        """
        logger.info("Starting automatic driver installation")

        if not self.system.is_root():
            logger.error("This program must be run as root")
            return None

        devices = self.detector.enumerate()
        if not devices:
            logger.error("Failed to detect graphics devices")
            return None

        ctx = PipelineContext(devices=tuple(devices))

        ctx.backup = self.backups.create_backup()
        if self.strict_backup and not ctx.backup.complete:
            logger.error("Backup incomplete and --strict-backup is set - aborting")
            return None

        ctx.repositories_enabled = self.repositories.ensure_repositories_enabled()
        return ctx

    def install_drivers(self, ctx: PipelineContext) -> bool:
        return self.installer.install_drivers(ctx)

    def verify(self) -> bool:
        return self.verifier.verify()

    def rollback(self, ctx: PipelineContext) -> None:
        self.rollbacks.rollback(ctx)

    def run_automatic(self) -> int:
        """Non-interactive run: any failure after initialization rolls back"""
        ctx = self.initialize()
        if ctx is None:
            return EXIT_FAILURE

        if not self.install_drivers(ctx) or not self.verify():
            self.rollback(ctx)
            return EXIT_FAILURE

        return EXIT_OK
