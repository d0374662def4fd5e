"""End-to-end tests for the detect -> install -> verify -> rollback pipeline"""

import pytest

from autodriver import config
from autodriver.backend import backup_manager
from autodriver.backend.pipeline import EXIT_FAILURE, EXIT_OK, DriverPipeline

from conftest import LSPCI_AMD, LSPCI_HOST_BRIDGE, LSPCI_NVIDIA, FakePackageManager, FakeSystem


class StaticRepositories:

    def __init__(self, enabled):
        self.enabled = enabled
        self.calls = 0

    def ensure_repositories_enabled(self):
        self.calls += 1
        return self.enabled


def make_pipeline(x11_paths, system, packages, repositories_enabled=True, **kwargs):
    return DriverPipeline(
        system=system,
        packages=packages,
        backup_dir=x11_paths['backup_dir'],
        xorg_conf=x11_paths['xorg_conf'],
        xorg_conf_d=x11_paths['xorg_conf_d'],
        nvidia_options={"wait_timeout": 0, "sleep": lambda s: None},
        repositories=StaticRepositories(repositories_enabled),
        **kwargs
    )


class TestInitialize:

    def test_requires_root(self, x11_paths):
        system = FakeSystem(lspci=LSPCI_AMD, root=False)
        pipeline = make_pipeline(x11_paths, system, FakePackageManager())

        assert pipeline.initialize() is None
        assert not x11_paths['backup_dir'].exists()

    def test_no_displays_aborts_before_backup(self, x11_paths):
        system = FakeSystem(lspci=LSPCI_HOST_BRIDGE)
        pipeline = make_pipeline(x11_paths, system, FakePackageManager())

        assert pipeline.initialize() is None
        assert not x11_paths['backup_dir'].exists()
        assert pipeline.repositories.calls == 0

    def test_builds_context(self, x11_paths):
        system = FakeSystem(lspci=LSPCI_NVIDIA + LSPCI_AMD, modules={"nouveau", "amdgpu"})
        pipeline = make_pipeline(x11_paths, system, FakePackageManager(), repositories_enabled=False)

        ctx = pipeline.initialize()

        assert isinstance(ctx.devices, tuple)
        assert [d.current_driver for d in ctx.devices] == ["nouveau", "amdgpu"]
        assert ctx.backup.modules_list.exists()
        assert ctx.repositories_enabled is False

    def test_incomplete_backup_proceeds_by_default(self, x11_paths, monkeypatch):
        x11_paths['xorg_conf'].write_text("conf")
        monkeypatch.setattr(backup_manager.shutil, "copy2", _refuse)
        pipeline = make_pipeline(x11_paths, FakeSystem(lspci=LSPCI_AMD), FakePackageManager())

        ctx = pipeline.initialize()

        assert ctx is not None
        assert not ctx.backup.complete

    def test_incomplete_backup_aborts_when_strict(self, x11_paths, monkeypatch):
        x11_paths['xorg_conf'].write_text("conf")
        monkeypatch.setattr(backup_manager.shutil, "copy2", _refuse)
        pipeline = make_pipeline(x11_paths, FakeSystem(lspci=LSPCI_AMD), FakePackageManager(),
                                 strict_backup=True)

        assert pipeline.initialize() is None
        assert pipeline.repositories.calls == 0


def _refuse(*args, **kwargs):
    raise PermissionError("read-only")


def test_amd_end_to_end_success(x11_paths):
    system = FakeSystem(lspci=LSPCI_AMD, modules={"amdgpu"}, processes=["Xorg"])
    packages = FakePackageManager()
    pipeline = make_pipeline(x11_paths, system, packages)

    assert pipeline.run_automatic() == EXIT_OK

    fragment = x11_paths['xorg_conf_d'] / "20-amdgpu.conf"
    assert 'Driver "amdgpu"' in fragment.read_text()
    assert packages.calls == [("install", tuple(config.AMD_PACKAGES))]


def test_nvidia_without_repository_rolls_back(x11_paths):
    x11_paths['xorg_conf'].write_text("known good")
    system = FakeSystem(lspci=LSPCI_NVIDIA, modules={"nouveau"}, processes=["Xorg"])
    packages = FakePackageManager()
    pipeline = make_pipeline(x11_paths, system, packages, repositories_enabled=False)

    ctx = pipeline.initialize()
    assert ctx.devices[0].pci_id == "10de:5678"
    x11_paths['xorg_conf'].write_text("broken")

    assert pipeline.install_drivers(ctx) is False
    assert packages.calls == []

    pipeline.rollback(ctx)

    assert x11_paths['xorg_conf'].read_text() == "known good"
    assert ("install", tuple(config.NVIDIA_FALLBACK_PACKAGES)) in packages.calls


def test_automatic_install_failure_rolls_back(x11_paths):
    system = FakeSystem(lspci=LSPCI_NVIDIA, processes=["Xorg"])
    packages = FakePackageManager()
    pipeline = make_pipeline(x11_paths, system, packages, repositories_enabled=False)

    assert pipeline.run_automatic() == EXIT_FAILURE
    assert packages.calls == [
        ("remove", tuple(config.NVIDIA_ROLLBACK_REMOVE)),
        ("install", tuple(config.NVIDIA_FALLBACK_PACKAGES)),
    ]


def test_verification_failure_rolls_back(x11_paths):
    system = FakeSystem(lspci=LSPCI_AMD, processes=[])
    packages = FakePackageManager()
    pipeline = make_pipeline(x11_paths, system, packages)

    assert pipeline.run_automatic() == EXIT_FAILURE

    assert packages.calls[-1] == ("reinstall", tuple(config.AMD_ROLLBACK_PACKAGES))
    assert not (x11_paths['xorg_conf_d'] / "20-amdgpu.conf").exists()


@pytest.mark.parametrize("system", [
    FakeSystem(lspci=LSPCI_AMD, root=False),
    FakeSystem(lspci=""),
])
def test_initialization_failure_exit_code(x11_paths, system):
    packages = FakePackageManager()

    assert make_pipeline(x11_paths, system, packages).run_automatic() == EXIT_FAILURE
    assert packages.calls == []
