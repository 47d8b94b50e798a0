"""Copy the cluster's TLS certificates from the master over scp."""
import logging
from pathlib import Path
from typing import List, Optional

from ..config import BootstrapSettings
from ..errors import InvalidMasterAddressError, NoCopyToolError
from .runner import CommandRunner

logger = logging.getLogger("kubeboot.certs")


def extract_hostname(master: str) -> str:
    """Host part of a `host[:port]` master address.

    Everything before the first colon; a bare host is returned unchanged.
    """
    hostname = master.split(":", 1)[0].strip()
    if not hostname:
        raise InvalidMasterAddressError(f"No hostname in master address {master!r}")
    return hostname


def build_copy_command(scp: str, settings: BootstrapSettings, hostname: str) -> List[str]:
    cmd = [scp, "-rp", "-o", "BatchMode=yes", "-P", str(settings.ssh_port)]
    if settings.ssh_key:
        cmd.extend(["-i", str(settings.ssh_key)])
    # Copy the directory's contents, not the directory, so the files land
    # where the certificate paths point.
    source = f"{settings.remote_user}@{hostname}:{settings.remote_cert_dir.rstrip('/')}/*"
    cmd.extend([source, str(settings.local_cert_dir)])
    return cmd


def copy_certificates(settings: BootstrapSettings, runner: Optional[CommandRunner] = None) -> Path:
    """Copy the remote certificate directory into the local config directory.

    Existing local files are overwritten. Nothing about the copied files is
    verified; trust rests on the SSH transport.

    Returns:
        The local directory the certificates were copied into

    Raises:
        NoCopyToolError: If scp is not on PATH
    """
    runner = runner or CommandRunner(dry_run=settings.dry_run)
    hostname = extract_hostname(settings.master)
    logger.info(f"Will copy certificates from {hostname}")

    scp = runner.which("scp")
    if not scp:
        raise NoCopyToolError("Couldn't find scp.")

    if settings.remote_user == "root":
        logger.warning(f"Copying certificates as root@{hostname}; set KUBEBOOT_REMOTE_USER to use a less privileged account")

    if not settings.dry_run:
        settings.local_cert_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Copying Kubernetes certificates from Kube Master")
    runner.run(build_copy_command(scp, settings, hostname))
    return settings.local_cert_dir
