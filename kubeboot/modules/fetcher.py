"""
Download and install the kubectl client binary.
"""
import hashlib
import logging
import os
import re
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

import requests

from ..config import BootstrapSettings, Config
from ..errors import ChecksumMismatchError, InstallError, InvalidReleaseError, NoTransferToolError
from .kubectl import Kubectl
from .models import TargetPair
from .runner import CommandRunner

logger = logging.getLogger("kubeboot.fetcher")

RELEASE_PATTERN = re.compile(r"v?\d+\.\d+\.\d+(?:-[0-9A-Za-z]+(?:\.[0-9A-Za-z]+)*)?")
RELEASE_ALIASES = ("stable", "latest")

# Preferred first.
TRANSFER_TOOLS = ("curl", "wget")


@dataclass(frozen=True)
class TransferTool:
    name: str
    path: str

    def command(self, url: str, dest: Path) -> List[str]:
        """Command line that fetches `url` into `dest`."""
        if self.name == "curl":
            return [self.path, "-fL", url, "-o", str(dest)]
        return [self.path, url, "-O", str(dest)]


def validate_release(release: str) -> str:
    if not RELEASE_PATTERN.fullmatch(release or ""):
        raise InvalidReleaseError(
            f"Invalid Kubernetes release {release!r}, expected a version such as v1.4.3"
        )
    return release


def resolve_release(release: str, base_url: str, timeout: Optional[int] = None) -> str:
    """Turn 'stable'/'latest' into a concrete version; validate anything else.

    Raises:
        InvalidReleaseError: If the release is malformed or the alias can't be resolved
    """
    if release not in RELEASE_ALIASES:
        return validate_release(release)

    url = f"{base_url.rstrip('/')}/{release}.txt"
    logger.info(f"Resolving release '{release}' from {url}")
    try:
        response = requests.get(url, timeout=timeout or Config.API_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise InvalidReleaseError(f"Could not resolve release '{release}': {e}") from e

    resolved = response.text.strip()
    logger.info(f"Release '{release}' is {resolved}")
    return validate_release(resolved)


def build_download_url(base_url: str, release: str, target: TargetPair) -> str:
    """URL of the kubectl binary for `release` built for `target`."""
    validate_release(release)
    return f"{base_url.rstrip('/')}/{release}/bin/{target.platform}/{target.arch}/kubectl"


def select_transfer_tool(which: Callable[[str], Optional[str]] = shutil.which) -> TransferTool:
    """Pick the first available download tool.

    Raises:
        NoTransferToolError: If neither curl nor wget is on PATH
    """
    for name in TRANSFER_TOOLS:
        path = which(name)
        if path:
            logger.debug(f"Using {name} at {path}")
            return TransferTool(name=name, path=path)
    raise NoTransferToolError(f"Couldn't find {' or '.join(TRANSFER_TOOLS)}.")


def sha256_of(path: Path) -> str:
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def verify_checksum(path: Path, url: str, timeout: Optional[int] = None) -> None:
    """Compare the downloaded binary with the published `<url>.sha256`.

    Raises:
        ChecksumMismatchError: If the digest differs or cannot be fetched
    """
    checksum_url = f"{url}.sha256"
    try:
        response = requests.get(checksum_url, timeout=timeout or Config.API_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise ChecksumMismatchError(f"Could not fetch checksum from {checksum_url}: {e}") from e

    parts = response.text.split()
    expected = parts[0].lower() if parts else ""
    actual = sha256_of(path)
    if actual != expected:
        raise ChecksumMismatchError(
            f"Checksum mismatch for {url}: expected {expected or '<empty>'}, got {actual}"
        )
    logger.info(f"Checksum verified: {actual}")


def install_binary(downloaded: Path, install_path: Path) -> Path:
    """Make `downloaded` executable and move it to `install_path`.

    Raises:
        InstallError: If the file cannot be made executable or moved into place
    """
    try:
        os.chmod(downloaded, 0o755)
        install_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(downloaded), str(install_path))
    except OSError as e:
        raise InstallError(f"Could not install kubectl to {install_path}: {e}") from e
    logger.info(f"Installed kubectl to {install_path}")

    search_path = os.environ.get("PATH", "").split(os.pathsep)
    if str(install_path.parent) not in search_path:
        logger.warning(f"Add '{install_path.parent}/' to your PATH to use the installed binary.")
    return install_path


def show_configuration(kubectl: Kubectl) -> None:
    """Enable colored output and echo the current kubectl configuration."""
    kubectl.config("set", "preferences.colors", "true")
    logger.info("Show kubectl current configuration")
    kubectl.config("view")


def download_kubectl(
    settings: BootstrapSettings,
    target: TargetPair,
    runner: Optional[CommandRunner] = None,
    tool: Optional[TransferTool] = None
) -> Path:
    """Fetch the kubectl binary for `target` and install it.

    The transfer tool is chosen before anything touches the network, so a
    machine without curl and wget fails without a download attempt. Callers
    that resolve a release alias first pass the tool they already picked.

    Returns:
        Path of the installed binary
    """
    runner = runner or CommandRunner(dry_run=settings.dry_run)
    tool = tool or select_transfer_tool(runner.which)
    url = build_download_url(settings.release_base_url, settings.release, target)
    logger.info(f"Will download kubectl from {url}")

    if settings.dry_run:
        runner.run(tool.command(url, Path("kubectl")))
        logger.info(f"[dry-run] would install kubectl to {settings.install_path}")
    else:
        with tempfile.TemporaryDirectory(prefix="kubeboot-") as workdir:
            downloaded = Path(workdir) / "kubectl"
            runner.run(tool.command(url, downloaded))
            if settings.verify_checksum:
                verify_checksum(downloaded, url)
            install_binary(downloaded, settings.install_path)

    show_configuration(Kubectl(settings.install_path, settings.kubeconfig, runner))
    return settings.install_path
