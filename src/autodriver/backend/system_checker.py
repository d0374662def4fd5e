"""
System state collaborator: PCI listing, kernel modules and running processes
"""

import os
from typing import Iterable, List, Optional, Set

import psutil

from autodriver.utils.commands import command_succeeded, run_command
from autodriver.utils.logger import logger


class SystemChecker:
    """Read-only queries against the running system"""

    def is_root(self) -> bool:
        """Check if running with root privileges"""
        return os.geteuid() == 0

    def list_pci_devices(self) -> str:
        """Return `lspci -nn` output, empty on failure"""
        result = run_command(['lspci', '-nn'], timeout=10)
        if result is None or result.returncode != 0:
            logger.error("lspci failed - cannot enumerate PCI devices")
            return ""
        return result.stdout

    def lsmod(self) -> str:
        """Return raw `lsmod` output, empty on failure"""
        result = run_command(['lsmod'], timeout=5)
        if result is None or result.returncode != 0:
            logger.error("Failed to read loaded kernel modules")
            return ""
        return result.stdout

    def loaded_modules(self) -> Set[str]:
        """Names from the first column of lsmod, header skipped"""
        modules = set()
        for line in self.lsmod().splitlines()[1:]:
            parts = line.split()
            if parts:
                modules.add(parts[0])
        return modules

    def is_module_loaded(self, name: str) -> bool:
        return name in self.loaded_modules()

    def running_processes(self, names: Iterable[str]) -> List[str]:
        """
        Find which of the given process names are running

        Names are compared exactly, like `pgrep -x`.
        """
        wanted = set(names)
        found = set()
        for proc in psutil.process_iter(['name']):
            name = proc.info.get('name')
            if name in wanted:
                found.add(name)
        return sorted(found)

    def rpm_eval(self, macro: str) -> Optional[str]:
        """Expand an RPM macro, e.g. %fedora"""
        result = run_command(['rpm', '-E', macro], timeout=5)
        if result is None or result.returncode != 0:
            logger.error(f"Could not expand RPM macro {macro}")
            return None
        value = result.stdout.strip()
        # rpm echoes the macro back unchanged when it is undefined
        if not value or value == macro:
            return None
        return value

    def run_tool(self, cmd: List[str]) -> bool:
        """Run a helper tool such as nvidia-xconfig or systemctl"""
        return command_succeeded(cmd)
