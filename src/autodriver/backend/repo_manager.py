"""
Repository enablement for proprietary drivers (RPM Fusion)
"""

import tempfile
from pathlib import Path
from typing import Dict, Optional

import requests

from autodriver import config
from autodriver.backend.package_manager import DnfManager
from autodriver.backend.system_checker import SystemChecker
from autodriver.utils.logger import logger


class RepositoryManager:
    """Makes sure the RPM Fusion free and nonfree channels are registered"""

    def __init__(self, packages: Optional[DnfManager] = None,
                 system: Optional[SystemChecker] = None,
                 repo_id: str = config.REPO_ID,
                 release_urls: Optional[Dict[str, str]] = None):
        self.packages = packages or DnfManager()
        self.system = system or SystemChecker()
        self.repo_id = repo_id
        self.release_urls = release_urls or dict(config.REPO_RELEASE_URLS)

    def ensure_repositories_enabled(self) -> bool:
        """
        Register the repositories unless they already are

        Returns:
            bool: True if proprietary installs may proceed. Requires every
            channel to register when the repository was not present.
        """
        logger.info("Checking third-party repositories...")

        if self.packages.has_repository(self.repo_id):
            logger.info(f"Repository '{self.repo_id}' already enabled")
            return True

        release = self.system.rpm_eval('%fedora')
        if not release:
            logger.error("Could not determine Fedora release, repositories not enabled")
            return False

        results = {}
        with tempfile.TemporaryDirectory(prefix="autodriver-repo-") as tmp:
            for channel, template in self.release_urls.items():
                results[channel] = self._register_channel(channel, template.format(release=release), Path(tmp))

        if all(results.values()):
            logger.info(f"✓ Repository '{self.repo_id}' enabled")
            return True

        failed = ", ".join(channel for channel, ok in results.items() if not ok)
        logger.warning(f"Could not enable repository channels: {failed}")
        return False

    def _register_channel(self, channel: str, url: str, dest_dir: Path) -> bool:
        dest = dest_dir / url.rsplit('/', 1)[-1]
        if not self.download_release_package(url, dest):
            return False

        logger.info(f"Registering {channel} channel...")
        return self.packages.install(dest)

    def download_release_package(self, url: str, dest_path: Path) -> bool:
        """
        Download a repository release RPM

        Args:
            url: Release package URL
            dest_path: Destination path on host

        Returns:
            bool: Success status
        """
        logger.info(f"Downloading {url}...")

        try:
            response = requests.get(url, stream=True, timeout=config.DOWNLOAD_TIMEOUT)
            response.raise_for_status()

            with open(dest_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)

            logger.debug(f"Release package saved to {dest_path}")
            return True

        except (requests.RequestException, OSError) as e:
            logger.error(f"Failed to download {url}: {e}")
            return False
