from pathlib import Path
from typing import Optional

import typer

from ..modules.certs import copy_certificates
from . import options

app = typer.Typer(help="Copy TLS certificates from the cluster master")


@app.command("fetch")
def fetch(
    master: Optional[str] = options.master_option(),
    remote_user: Optional[str] = options.remote_user_option(),
    remote_cert_dir: Optional[str] = options.remote_cert_dir_option(),
    local_cert_dir: Optional[Path] = options.local_cert_dir_option(),
    ssh_port: Optional[int] = options.ssh_port_option(),
    ssh_key: Optional[Path] = options.ssh_key_option(),
    profile: Optional[str] = options.profile_option(),
    dry_run: bool = options.dry_run_option(),
):
    """Copy the master's certificate directory over scp."""
    settings = options.load_settings(
        profile=profile,
        master=master,
        remote_user=remote_user,
        remote_cert_dir=remote_cert_dir,
        local_cert_dir=local_cert_dir,
        ssh_port=ssh_port,
        ssh_key=ssh_key,
        dry_run=dry_run,
    )
    with options.exit_on_error():
        destination = copy_certificates(settings)
        typer.echo(f"✅ Certificates copied to {destination}")
