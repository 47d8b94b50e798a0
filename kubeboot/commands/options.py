"""Options shared by several commands and the settings/error plumbing behind them."""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import typer

from ..config import BootstrapSettings
from ..errors import EXIT_INTERRUPTED, KubebootError

logger = logging.getLogger("kubeboot.cli")


def profile_option():
    return typer.Option(None, "--profile", "-p", help="YAML profile with bootstrap settings")


def dry_run_option():
    return typer.Option(False, "--dry-run", help="Log external commands instead of running them")


def release_option():
    return typer.Option(None, "--release", "-r", help="Kubernetes release, e.g. v1.4.3, or 'stable'")


def master_option():
    return typer.Option(None, "--master", "-m", help="Kubernetes master as host[:port]")


def kubeconfig_option():
    return typer.Option(None, "--kubeconfig", help="kubectl configuration file to write")


def install_path_option():
    return typer.Option(None, "--install-path", help="Where the kubectl binary is installed")


def verify_checksum_option():
    return typer.Option(None, "--verify-checksum/--no-verify-checksum", help="Check the binary against its published SHA-256")


def ca_cert_option():
    return typer.Option(None, "--ca-cert", help="Cluster CA certificate")


def admin_cert_option():
    return typer.Option(None, "--admin-cert", help="Admin client certificate")


def admin_key_option():
    return typer.Option(None, "--admin-key", help="Admin client key")


def remote_user_option():
    return typer.Option(None, "--remote-user", "-u", help="SSH user on the master")


def remote_cert_dir_option():
    return typer.Option(None, "--remote-cert-dir", help="Certificate directory on the master")


def local_cert_dir_option():
    return typer.Option(None, "--local-cert-dir", help="Local directory receiving the certificates")


def ssh_port_option():
    return typer.Option(None, "--ssh-port", min=1, max=65535, help="SSH port on the master")


def ssh_key_option():
    return typer.Option(None, "--ssh-key", help="Path to SSH private key")


def cluster_name_option():
    return typer.Option(None, "--cluster-name", help="Name of the cluster entry")


def user_name_option():
    return typer.Option(None, "--user-name", help="Name of the credential entry")


def context_name_option():
    return typer.Option(None, "--context-name", help="Name of the context entry")


def load_settings(profile: Optional[str] = None, **overrides: Any) -> BootstrapSettings:
    """Resolve settings, turning profile problems into a clean exit."""
    with exit_on_error():
        return BootstrapSettings.load(profile=profile, **overrides)


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Convert kubeboot errors into the matching process exit code."""
    try:
        yield
    except KubebootError as e:
        debug = logging.getLogger().isEnabledFor(logging.DEBUG)
        logger.error(f"❌ {e}", exc_info=debug)
        raise typer.Exit(code=e.exit_code)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        raise typer.Exit(code=EXIT_INTERRUPTED)
