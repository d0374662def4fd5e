"""Auto Driver Installer - detects GPUs and installs display drivers on Fedora"""

__version__ = "0.1.0"
