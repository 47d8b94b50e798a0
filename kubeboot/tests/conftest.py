import subprocess
from pathlib import Path

import pytest

from kubeboot.config import BootstrapSettings
from kubeboot.errors import CommandError
from kubeboot.modules.runner import CommandRunner


class RecordingRunner(CommandRunner):
    """Records commands instead of running them.

    tools: names resolvable through which()
    fail_on: {argument: returncode}; a command containing the argument fails
    """

    def __init__(self, tools=("curl", "wget", "scp"), fail_on=None, dry_run=False):
        super().__init__(dry_run=dry_run)
        self.tools = set(tools)
        self.fail_on = fail_on or {}
        self.commands = []

    def which(self, tool):
        return f"/usr/bin/{tool}" if tool in self.tools else None

    def run(self, cmd, capture=False, check=True):
        self.commands.append(list(cmd))
        for arg, code in self.fail_on.items():
            if arg in cmd:
                raise CommandError(list(cmd), code)
        if self.dry_run:
            return subprocess.CompletedProcess(cmd, 0, "", "")
        # Fake a download so the fetcher has a file to install.
        if cmd[0].endswith("curl") and "-o" in cmd:
            Path(cmd[cmd.index("-o") + 1]).write_bytes(b"kubectl-binary")
        if cmd[0].endswith("wget") and "-O" in cmd:
            Path(cmd[cmd.index("-O") + 1]).write_bytes(b"kubectl-binary")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    def kubectl_calls(self):
        """kubectl commands without the binary path and trailing --kubeconfig."""
        return [c[1:-1] for c in self.commands if c[0].endswith("kubectl")]


@pytest.fixture
def make_runner():
    return RecordingRunner


@pytest.fixture
def settings(tmp_path):
    kube_dir = tmp_path / ".kube"
    return BootstrapSettings(
        release="v1.4.3",
        master="10.0.0.10:443",
        ca_cert=kube_dir / "ca.crt",
        admin_cert=kube_dir / "kubecfg.crt",
        admin_key=kube_dir / "kubecfg.key",
        kubeconfig=kube_dir / "config",
        install_path=tmp_path / "bin" / "kubectl",
        local_cert_dir=kube_dir,
    )


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in [
        "KUBEBOOT_RELEASE", "KUBEBOOT_RELEASE_URL", "KUBEBOOT_MASTER_HOST",
        "KUBEBOOT_CA_CERT", "KUBEBOOT_ADMIN_CERT", "KUBEBOOT_ADMIN_KEY",
        "KUBEBOOT_KUBECONFIG", "KUBEBOOT_INSTALL_PATH", "KUBEBOOT_REMOTE_USER",
        "KUBEBOOT_REMOTE_CERT_DIR", "KUBEBOOT_LOCAL_CERT_DIR", "KUBEBOOT_SSH_PORT",
        "KUBEBOOT_SSH_KEY", "KUBEBOOT_CLUSTER_NAME", "KUBEBOOT_USER_NAME",
        "KUBEBOOT_CONTEXT_NAME", "KUBEBOOT_VERIFY_CHECKSUM",
    ]:
        monkeypatch.delenv(var, raising=False)
