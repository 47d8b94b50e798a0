"""Write the cluster, credential and context entries into the kubeconfig."""
import logging
import shutil
from datetime import date
from pathlib import Path
from typing import Optional

from ..config import BootstrapSettings
from .kubectl import Kubectl

logger = logging.getLogger("kubeboot.kubeconfig")


def backup_path_for(kubeconfig: Path, today: Optional[date] = None) -> Path:
    """`<kubeconfig>.<YYYYMMDD>.bak` for the given day."""
    stamp = (today or date.today()).strftime("%Y%m%d")
    return kubeconfig.with_name(f"{kubeconfig.name}.{stamp}.bak")


def backup_kubeconfig(kubeconfig: Path, today: Optional[date] = None) -> Optional[Path]:
    """Copy the kubeconfig aside before it is modified.

    Best-effort: a missing file or a failed copy is logged and None is
    returned. A backup made earlier the same day is overwritten.
    """
    if not kubeconfig.exists():
        logger.info(f"No existing configuration at {kubeconfig}, nothing to back up")
        return None

    backup = backup_path_for(kubeconfig, today)
    try:
        shutil.copy2(kubeconfig, backup)
    except OSError as e:
        logger.warning(f"Could not back up {kubeconfig} to {backup}: {e}")
        return None
    logger.info(f"Backed up the configuration file to {backup}")
    return backup


def configure_kubectl(settings: BootstrapSettings, kubectl: Kubectl, today: Optional[date] = None) -> None:
    """Register the cluster, the admin credential and a context, then switch to it.

    The four kubectl calls run in order and the first failure stops the rest.

    Raises:
        CommandError: If any kubectl call exits nonzero
    """
    logger.info(f"API access to Kubernetes master: {settings.master}")
    if settings.dry_run:
        logger.info(f"[dry-run] would back up {settings.kubeconfig}")
    else:
        backup_kubeconfig(settings.kubeconfig, today)

    kubectl.config(
        "set-cluster", settings.cluster_name,
        f"--server=https://{settings.master}",
        f"--certificate-authority={settings.ca_cert}",
        "--embed-certs=true",
    )
    kubectl.config(
        "set-credentials", settings.user_name,
        f"--certificate-authority={settings.ca_cert}",
        f"--client-key={settings.admin_key}",
        f"--client-certificate={settings.admin_cert}",
    )
    kubectl.config(
        "set-context", settings.context_name,
        f"--cluster={settings.cluster_name}",
        f"--user={settings.user_name}",
    )
    kubectl.config("use-context", settings.context_name)
    logger.info(f"Switched to context {settings.context_name}")
