"""Full bootstrap command.

Runs every stage in order: detect the platform, install kubectl, copy the
master's certificates, write the kubeconfig and list the cluster nodes.
"""
from pathlib import Path
from typing import Optional

import typer

from ..modules.pipeline import BootstrapPipeline
from . import options

app = typer.Typer(help="Install and configure kubectl against a cluster master")


@app.command("run")
def run(
    release: Optional[str] = options.release_option(),
    master: Optional[str] = options.master_option(),
    ca_cert: Optional[Path] = options.ca_cert_option(),
    admin_cert: Optional[Path] = options.admin_cert_option(),
    admin_key: Optional[Path] = options.admin_key_option(),
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    install_path: Optional[Path] = options.install_path_option(),
    remote_user: Optional[str] = options.remote_user_option(),
    remote_cert_dir: Optional[str] = options.remote_cert_dir_option(),
    local_cert_dir: Optional[Path] = options.local_cert_dir_option(),
    ssh_port: Optional[int] = options.ssh_port_option(),
    ssh_key: Optional[Path] = options.ssh_key_option(),
    cluster_name: Optional[str] = options.cluster_name_option(),
    user_name: Optional[str] = options.user_name_option(),
    context_name: Optional[str] = options.context_name_option(),
    verify_checksum: Optional[bool] = options.verify_checksum_option(),
    profile: Optional[str] = options.profile_option(),
    dry_run: bool = options.dry_run_option(),
):
    """Run the whole bootstrap pipeline.

    Example:
        kubeboot bootstrap run --master 10.0.0.10:443 --release v1.4.3
    """
    settings = options.load_settings(
        profile=profile,
        release=release,
        master=master,
        ca_cert=ca_cert,
        admin_cert=admin_cert,
        admin_key=admin_key,
        kubeconfig=kubeconfig,
        install_path=install_path,
        remote_user=remote_user,
        remote_cert_dir=remote_cert_dir,
        local_cert_dir=local_cert_dir,
        ssh_port=ssh_port,
        ssh_key=ssh_key,
        cluster_name=cluster_name,
        user_name=user_name,
        context_name=context_name,
        verify_checksum=verify_checksum,
        dry_run=dry_run,
    )
    with options.exit_on_error():
        BootstrapPipeline(settings).run()
