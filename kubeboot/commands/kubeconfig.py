from pathlib import Path
from typing import Optional

import typer

from ..modules.kubeconfig import backup_kubeconfig, configure_kubectl
from ..modules.kubectl import Kubectl
from ..modules.runner import CommandRunner
from . import options

app = typer.Typer(help="Back up and write the kubectl configuration")


@app.command("backup")
def backup(
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    profile: Optional[str] = options.profile_option(),
):
    """Copy the kubeconfig to <kubeconfig>.<YYYYMMDD>.bak."""
    settings = options.load_settings(profile=profile, kubeconfig=kubeconfig)
    saved = backup_kubeconfig(settings.kubeconfig)
    if saved:
        typer.echo(f"✅ Backup written to {saved}")
    else:
        typer.echo("⚠️  No backup written.")


@app.command("configure")
def configure(
    master: Optional[str] = options.master_option(),
    ca_cert: Optional[Path] = options.ca_cert_option(),
    admin_cert: Optional[Path] = options.admin_cert_option(),
    admin_key: Optional[Path] = options.admin_key_option(),
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    install_path: Optional[Path] = options.install_path_option(),
    cluster_name: Optional[str] = options.cluster_name_option(),
    user_name: Optional[str] = options.user_name_option(),
    context_name: Optional[str] = options.context_name_option(),
    profile: Optional[str] = options.profile_option(),
    dry_run: bool = options.dry_run_option(),
):
    """Register cluster, credential and context, then switch to the context."""
    settings = options.load_settings(
        profile=profile,
        master=master,
        ca_cert=ca_cert,
        admin_cert=admin_cert,
        admin_key=admin_key,
        kubeconfig=kubeconfig,
        install_path=install_path,
        cluster_name=cluster_name,
        user_name=user_name,
        context_name=context_name,
        dry_run=dry_run,
    )
    kubectl = Kubectl(settings.install_path, settings.kubeconfig, CommandRunner(dry_run=settings.dry_run))
    with options.exit_on_error():
        configure_kubectl(settings, kubectl)
