"""
Blocking execution of external programs (curl, wget, scp, kubectl).
"""
import logging
import shlex
import shutil
import subprocess
from typing import List, Optional

from ..config import Config
from ..errors import CommandError

logger = logging.getLogger("kubeboot.runner")


class CommandRunner:
    """Runs commands to completion, one at a time.

    In dry-run mode commands are logged and reported as successful without
    being executed. Tool lookups still consult the real PATH.
    """

    def __init__(self, dry_run: bool = False, timeout: Optional[int] = None):
        self.dry_run = dry_run
        self.timeout = timeout if timeout is not None else Config.COMMAND_TIMEOUT

    def which(self, tool: str) -> Optional[str]:
        """Return the absolute path of `tool` on PATH, or None."""
        return shutil.which(tool)

    def run(self, cmd: List[str], capture: bool = False, check: bool = True) -> subprocess.CompletedProcess:
        """Run a command and wait for it.

        Args:
            cmd: Command and arguments
            capture: Capture stdout/stderr instead of passing them to the terminal
            check: Raise CommandError on a nonzero exit status

        Returns:
            The completed process

        Raises:
            CommandError: If the command fails, times out or cannot be started
        """
        printable = shlex.join(cmd)
        if self.dry_run:
            logger.info(f"[dry-run] {printable}")
            return subprocess.CompletedProcess(cmd, 0, "", "")

        logger.debug(f"Running: {printable}")
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.PIPE if capture else None,
                text=True,
                timeout=self.timeout
            )
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise CommandError(cmd, 124, f"Command timed out after {self.timeout} seconds") from e

        if check and result.returncode != 0:
            raise CommandError(cmd, result.returncode, result.stderr if capture else None)
        return result
