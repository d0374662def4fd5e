"""
One-shot systemd service that runs the installer in automatic mode at boot
"""

import shutil
from pathlib import Path
from typing import Optional

from autodriver import config
from autodriver.backend.system_checker import SystemChecker
from autodriver.utils.logger import logger


def get_unit_content(exec_path: Path) -> str:
    return f"""[Unit]
Description=Automatic Graphics Driver Installer
After=network.target

[Service]
Type=oneshot
ExecStart={exec_path} --auto
RemainAfterExit=yes

[Install]
WantedBy=multi-user.target
"""


class ServiceInstaller:
    """Writes and enables the auto-driver-installer unit"""

    def __init__(self, system: Optional[SystemChecker] = None,
                 unit_dir: Path = config.SYSTEMD_UNIT_DIR,
                 service_name: str = config.SERVICE_NAME):
        self.system = system or SystemChecker()
        self.unit_path = Path(unit_dir) / service_name
        self.service_name = service_name

    @staticmethod
    def resolve_exec_path() -> Path:
        """Installed console script, falling back to /usr/bin"""
        found = shutil.which(config.SCRIPT_NAME)
        return Path(found) if found else config.DEFAULT_EXEC_PATH

    def install(self, exec_path: Optional[Path] = None) -> bool:
        exec_path = exec_path or self.resolve_exec_path()

        try:
            self.unit_path.parent.mkdir(parents=True, exist_ok=True)
            self.unit_path.write_text(get_unit_content(exec_path), encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write {self.unit_path}: {e}")
            return False

        logger.info(f"Wrote {self.unit_path}")

        if not self.system.run_tool(['systemctl', 'enable', self.service_name]):
            logger.error(f"Failed to enable {self.service_name}")
            return False

        logger.info(f"✓ {self.service_name} installed and enabled")
        return True
