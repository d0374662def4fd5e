"""
Subprocess helpers shared by the system and package collaborators
"""

import subprocess
from typing import List, Optional

from autodriver import config
from autodriver.utils.logger import logger


def run_command(cmd: List[str], timeout: int = config.COMMAND_TIMEOUT) -> Optional[subprocess.CompletedProcess]:
    """
    Run a command without a shell and never raise

    Args:
        cmd: Argument list
        timeout: Timeout in seconds

    Returns:
        CompletedProcess, or None if the command could not run to completion
    """
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            stdin=subprocess.DEVNULL,
            check=False
        )
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd[0]}")
    except subprocess.TimeoutExpired:
        logger.error(f"Timeout after {timeout}s: {' '.join(cmd)}")
    except OSError as e:
        logger.error(f"Failed to run {cmd[0]}: {e}")

    return None


def command_succeeded(cmd: List[str], timeout: int = config.COMMAND_TIMEOUT) -> bool:
    """Run a command and report whether it exited with status 0"""
    result = run_command(cmd, timeout=timeout)
    if result is None:
        return False

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        if stderr:
            logger.debug(f"{cmd[0]} exited with {result.returncode}: {stderr}")
        return False

    return True
