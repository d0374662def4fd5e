"""
Post-install verification
"""

from typing import Iterable, Optional

from autodriver import config
from autodriver.backend.system_checker import SystemChecker
from autodriver.utils.logger import logger


class DisplayVerifier:
    """Smoke test: is any display server still running after the driver swap"""

    def __init__(self, system: Optional[SystemChecker] = None,
                 process_names: Iterable[str] = config.DISPLAY_SERVER_PROCESSES):
        self.system = system or SystemChecker()
        self.process_names = tuple(process_names)

    def verify(self) -> bool:
        logger.info("Verifying display server...")

        running = self.system.running_processes(self.process_names)
        if not running:
            logger.error("Display server is not running after driver installation!")
            return False

        logger.info(f"✓ Display server running: {', '.join(running)}")
        return True
