"""Detect which kubectl build matches the running machine."""
import fnmatch
import logging
import platform
from typing import Optional, Tuple

from ..errors import UnsupportedArchitectureError, UnsupportedPlatformError
from .models import TargetPair

logger = logging.getLogger("kubeboot.detect")

PLATFORMS = {
    "Darwin": "darwin",
    "Linux": "linux",
}

# Shell-style patterns, checked in order; the first match wins.
ARCHITECTURES: Tuple[Tuple[str, str], ...] = (
    ("x86_64*", "amd64"),
    ("i?86_64*", "amd64"),
    ("amd64*", "amd64"),
    ("i?86*", "386"),
)


def detect_platform(system: Optional[str] = None) -> str:
    kernel = system if system is not None else platform.system()
    try:
        return PLATFORMS[kernel]
    except KeyError:
        raise UnsupportedPlatformError(
            f"Unknown, unsupported platform: {kernel}. "
            f"Supported platforms: {', '.join(PLATFORMS)}."
        ) from None


def detect_arch(machine: Optional[str] = None) -> str:
    machine = machine if machine is not None else platform.machine()
    for pattern, arch in ARCHITECTURES:
        if fnmatch.fnmatchcase(machine, pattern):
            return arch
    raise UnsupportedArchitectureError(
        f"Unknown, unsupported architecture ({machine}). "
        "Supported architectures x86_64, i686."
    )


def detect_target(system: Optional[str] = None, machine: Optional[str] = None) -> TargetPair:
    """Map the host OS and CPU to the kubectl build to download.

    Args:
        system: OS name as reported by uname -s (defaults to the running host)
        machine: Machine name as reported by uname -m (defaults to the running host)

    Raises:
        UnsupportedPlatformError: For any OS other than Linux or Darwin
        UnsupportedArchitectureError: For any CPU other than x86_64 or i?86
    """
    target = TargetPair(platform=detect_platform(system), arch=detect_arch(machine))
    logger.debug(f"Detected target {target}")
    return target
