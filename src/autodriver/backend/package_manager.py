"""
Package collaborator backed by dnf
"""

from pathlib import Path
from typing import Union

from autodriver import config
from autodriver.utils.commands import command_succeeded, run_command
from autodriver.utils.logger import logger


class DnfManager:
    """Install, remove and reinstall packages with dnf"""

    def __init__(self, timeout: int = config.PACKAGE_TIMEOUT):
        self.timeout = timeout

    def _dnf(self, action: str, packages) -> bool:
        names = [str(package) for package in packages]
        logger.info(f"dnf {action}: {' '.join(names)}")

        if command_succeeded(['dnf', action, '-y', *names], timeout=self.timeout):
            return True

        logger.error(f"dnf {action} failed for: {' '.join(names)}")
        return False

    def install(self, *packages: Union[str, Path]) -> bool:
        """Install packages by name, URL or local RPM path"""
        return self._dnf('install', packages)

    def remove(self, *packages: str) -> bool:
        return self._dnf('remove', packages)

    def reinstall(self, *packages: str) -> bool:
        return self._dnf('reinstall', packages)

    def has_repository(self, repo_id: str) -> bool:
        """Check if any enabled repository id contains ``repo_id``"""
        result = run_command(['dnf', 'repolist'], timeout=120)
        if result is None or result.returncode != 0:
            logger.warning("dnf repolist failed")
            return False
        return repo_id in result.stdout
