"""
Global configuration and constants for Auto Driver Installer
"""

from pathlib import Path

# Application metadata
APP_NAME = "Auto Driver Installer"
APP_VERSION = "0.1.0"
APP_DESCRIPTION = "Automatic graphics driver installer for Fedora"
SCRIPT_NAME = "auto-driver-installer"

# Paths
STATE_DIR = Path("/var/lib/driver-installer")
BACKUP_DIR = STATE_DIR / "backup"
XORG_CONF = Path("/etc/X11/xorg.conf")
XORG_CONF_D = Path("/etc/X11/xorg.conf.d")
SYSTEMD_UNIT_DIR = Path("/etc/systemd/system")
SERVICE_NAME = "auto-driver-installer.service"
DEFAULT_EXEC_PATH = Path("/usr/bin") / SCRIPT_NAME

# Logging
LOG_LEVEL = "INFO"  # DEBUG, INFO, WARNING, ERROR
LOG_FILE = STATE_DIR / "install.log"

# PCI vendor IDs
GPU_VENDOR_NVIDIA = "10de"
GPU_VENDOR_AMD = "1002"
GPU_VENDOR_INTEL = "8086"

# Third-party repository (RPM Fusion)
REPO_ID = "rpmfusion"
REPO_RELEASE_URLS = {
    "free": "https://mirrors.rpmfusion.org/free/fedora/rpmfusion-free-release-{release}.noarch.rpm",
    "nonfree": "https://mirrors.rpmfusion.org/nonfree/fedora/rpmfusion-nonfree-release-{release}.noarch.rpm",
}
DOWNLOAD_TIMEOUT = 120  # seconds

# Driver packages
NVIDIA_PACKAGES = ["akmod-nvidia", "xorg-x11-drv-nvidia", "xorg-x11-drv-nvidia-cuda"]
NVIDIA_ROLLBACK_REMOVE = ["akmod-nvidia", "xorg-x11-drv-nvidia*"]
NVIDIA_FALLBACK_PACKAGES = ["xorg-x11-drv-nouveau"]
AMD_PACKAGES = ["mesa-dri-drivers", "mesa-libGL", "mesa-vulkan-drivers", "xorg-x11-drv-amdgpu"]
AMD_ROLLBACK_PACKAGES = ["mesa-dri-drivers", "mesa-libGL", "xorg-x11-drv-amdgpu"]
INTEL_PACKAGES = ["mesa-dri-drivers", "mesa-libGL", "xorg-x11-drv-intel"]

# Config fragments written after a successful install
AMD_FRAGMENT_NAME = "20-amdgpu.conf"
INTEL_FRAGMENT_NAME = "20-intel.conf"

# NVIDIA kernel module build (akmods)
MODULE_BUILD_TIMEOUT = 300  # seconds
MODULE_POLL_INTERVAL = 5  # seconds

# Subprocess limits
COMMAND_TIMEOUT = 30  # seconds
PACKAGE_TIMEOUT = 1800  # seconds, dnf can take a while

# Display servers considered alive for verification
DISPLAY_SERVER_PROCESSES = ("Xorg", "X", "wayland")
