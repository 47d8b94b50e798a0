"""Error types for kubeboot.

Every error carries the process exit code the CLI should terminate with:

- 1: unsupported platform
- 2: unsupported architecture
- 3: no transfer tool (curl/wget)
- 4: no copy tool (scp)
- 5: invalid or unresolvable release
- 6: checksum mismatch
- 7: kubectl could not be installed (permissions, bad install path)
- anything else: exit code of the failed external command
"""
from typing import List, Optional

EXIT_SUCCESS = 0
EXIT_UNSUPPORTED_PLATFORM = 1
EXIT_UNSUPPORTED_ARCHITECTURE = 2
EXIT_NO_TRANSFER_TOOL = 3
EXIT_NO_COPY_TOOL = 4
EXIT_INVALID_RELEASE = 5
EXIT_CHECKSUM_MISMATCH = 6
EXIT_INSTALL_FAILED = 7
EXIT_INTERRUPTED = 130


class KubebootError(Exception):
    """Base class for all kubeboot errors."""
    exit_code: int = 1


class UnsupportedPlatformError(KubebootError):
    exit_code = EXIT_UNSUPPORTED_PLATFORM


class UnsupportedArchitectureError(KubebootError):
    exit_code = EXIT_UNSUPPORTED_ARCHITECTURE


class NoTransferToolError(KubebootError):
    exit_code = EXIT_NO_TRANSFER_TOOL


class NoCopyToolError(KubebootError):
    exit_code = EXIT_NO_COPY_TOOL


class InvalidReleaseError(KubebootError):
    exit_code = EXIT_INVALID_RELEASE


class ChecksumMismatchError(KubebootError):
    exit_code = EXIT_CHECKSUM_MISMATCH


class InstallError(KubebootError):
    exit_code = EXIT_INSTALL_FAILED


class InvalidMasterAddressError(KubebootError):
    exit_code = 1


class ProfileError(KubebootError):
    """Raised when a YAML profile cannot be read or fails validation."""
    exit_code = 1


class SettingsError(KubebootError):
    """Raised when an environment variable holds an unusable value."""
    exit_code = 1


class CommandError(KubebootError):
    """An external command exited with a nonzero status."""

    def __init__(self, cmd: List[str], returncode: int, stderr: Optional[str] = None):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed with exit code {returncode}: {' '.join(cmd)}"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)

    @property
    def exit_code(self) -> int:
        return self.returncode
