from pathlib import Path
from typing import Optional

import typer

from ..modules.detect import detect_target
from ..modules.fetcher import build_download_url, download_kubectl, resolve_release, select_transfer_tool
from ..modules.runner import CommandRunner
from . import options

app = typer.Typer(help="Download and install the kubectl binary")


@app.command("url")
def url(
    release: Optional[str] = options.release_option(),
    profile: Optional[str] = options.profile_option(),
):
    """Print the download URL for this machine."""
    settings = options.load_settings(profile=profile, release=release)
    with options.exit_on_error():
        target = detect_target()
        resolved = resolve_release(settings.release, settings.release_base_url)
        typer.echo(build_download_url(settings.release_base_url, resolved, target))


@app.command("install")
def install(
    release: Optional[str] = options.release_option(),
    install_path: Optional[Path] = options.install_path_option(),
    kubeconfig: Optional[Path] = options.kubeconfig_option(),
    verify_checksum: Optional[bool] = options.verify_checksum_option(),
    profile: Optional[str] = options.profile_option(),
    dry_run: bool = options.dry_run_option(),
):
    """Download kubectl for this machine and install it."""
    settings = options.load_settings(
        profile=profile,
        release=release,
        install_path=install_path,
        kubeconfig=kubeconfig,
        verify_checksum=verify_checksum,
        dry_run=dry_run,
    )
    with options.exit_on_error():
        target = detect_target()
        runner = CommandRunner(dry_run=settings.dry_run)
        tool = select_transfer_tool(runner.which)
        settings = settings.with_release(resolve_release(settings.release, settings.release_base_url))
        installed = download_kubectl(settings, target, runner, tool)
        typer.echo(f"✅ kubectl {settings.release} ({target}) installed at {installed}")
