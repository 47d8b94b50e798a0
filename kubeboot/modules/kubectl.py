"""Thin wrapper around the installed kubectl binary."""
import subprocess
from pathlib import Path
from typing import Optional

from .runner import CommandRunner


class Kubectl:
    """Invokes one kubectl binary against one kubeconfig file.

    Every call passes --kubeconfig so the file kubeboot backs up is the file
    kubectl writes, whatever KUBECONFIG says.
    """

    def __init__(self, binary: Path, kubeconfig: Path, runner: Optional[CommandRunner] = None):
        self.binary = Path(binary)
        self.kubeconfig = Path(kubeconfig)
        self.runner = runner or CommandRunner()

    def run(self, *args: str, capture: bool = False) -> subprocess.CompletedProcess:
        cmd = [str(self.binary), *args, f"--kubeconfig={self.kubeconfig}"]
        return self.runner.run(cmd, capture=capture)

    def config(self, *args: str) -> subprocess.CompletedProcess:
        return self.run("config", *args)
