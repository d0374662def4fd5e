"""Pytest configuration and shared fixtures."""

import logging
import os
import sys

import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from autodriver.utils.logger import LOGGER_NAME  # noqa: E402

LSPCI_AMD = "03:00.0 VGA compatible controller [0300]: Advanced Micro Devices, Inc. [AMD/ATI] Navi 23 [1002:1234] (rev c1)\n"
LSPCI_NVIDIA = "01:00.0 VGA compatible controller [0300]: NVIDIA Corporation GA106 [GeForce RTX 3060] [10de:5678] (rev a1)\n"
LSPCI_INTEL = "00:02.0 VGA compatible controller [0300]: Intel Corporation UHD Graphics 630 [8086:3e92]\n"
LSPCI_HOST_BRIDGE = "00:00.0 Host bridge [0600]: Intel Corporation 8th Gen Core Processor Host Bridge [8086:3ec2] (rev 07)\n"


class FakeSystem:
    """Stands in for SystemChecker"""

    def __init__(self, lspci="", modules=(), processes=(), root=True, fedora="40"):
        self.lspci = lspci
        self.modules = set(modules)
        self.processes = list(processes)
        self.root = root
        self.fedora = fedora
        self.tool_result = True
        self.tool_calls = []
        self.lsmod_calls = 0

    def is_root(self):
        return self.root

    def list_pci_devices(self):
        return self.lspci

    def lsmod(self):
        self.lsmod_calls += 1
        lines = ["Module                  Size  Used by"]
        lines += [f"{name:<24}16384  0" for name in sorted(self.modules)]
        return "\n".join(lines) + "\n"

    def loaded_modules(self):
        self.lsmod_calls += 1
        return set(self.modules)

    def is_module_loaded(self, name):
        return name in self.modules

    def running_processes(self, names):
        return sorted(set(names) & set(self.processes))

    def rpm_eval(self, macro):
        return self.fedora

    def run_tool(self, cmd):
        self.tool_calls.append(list(cmd))
        return self.tool_result


class FakePackageManager:
    """Stands in for DnfManager; records every call"""

    def __init__(self, has_repo=True, fail_on=()):
        self.has_repo = has_repo
        self.fail_on = set(fail_on)
        self.calls = []

    def _record(self, action, packages):
        self.calls.append((action, tuple(str(p) for p in packages)))
        return not any(token in str(p) for p in packages for token in self.fail_on)

    def install(self, *packages):
        return self._record('install', packages)

    def remove(self, *packages):
        return self._record('remove', packages)

    def reinstall(self, *packages):
        return self._record('reinstall', packages)

    def has_repository(self, repo_id):
        return self.has_repo


class FakeClock:
    """Monotonic clock advanced only by sleep()"""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_system():
    return FakeSystem()


@pytest.fixture
def fake_packages():
    return FakePackageManager()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def x11_paths(tmp_path):
    """Temporary stand-ins for /etc/X11 and the backup directory"""
    etc = tmp_path / "etc" / "X11"
    etc.mkdir(parents=True)
    return {
        'xorg_conf': etc / "xorg.conf",
        'xorg_conf_d': etc / "xorg.conf.d",
        'backup_dir': tmp_path / "backup",
    }


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
