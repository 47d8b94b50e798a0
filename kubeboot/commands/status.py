"""Read-only commands: platform detection, connectivity and diagnostics."""
import json
from pathlib import Path
from typing import Optional

import typer

from ..modules import doctor as doctor_module
from ..modules.connectivity import check_connectivity
from ..modules.detect import detect_target
from ..modules.kubectl import Kubectl
from . import options


def detect():
    """Show the platform/architecture kubectl would be downloaded for."""
    with options.exit_on_error():
        typer.echo(str(detect_target()))


def check(
    install_path: Optional[Path] = options.install_path_option(),
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    profile: Optional[str] = options.profile_option(),
):
    """List cluster nodes with the installed kubectl."""
    settings = options.load_settings(profile=profile, install_path=install_path, kubeconfig=kubeconfig)
    with options.exit_on_error():
        check_connectivity(Kubectl(settings.install_path, settings.kubeconfig))


def doctor(
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    profile: Optional[str] = options.profile_option(),
):
    """Inspect the written kubeconfig with the Kubernetes API client."""
    settings = options.load_settings(profile=profile, kubeconfig=kubeconfig)
    report = doctor_module.run(settings.kubeconfig)
    typer.echo(json.dumps(report, indent=2))
    if not report["healthy"]:
        raise typer.Exit(code=1)
