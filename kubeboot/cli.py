import logging

import typer

from kubeboot.commands import bootstrap, certs, kubeconfig, kubectl, status
from kubeboot.config import Config

app = typer.Typer(help="Install kubectl and point it at a Kubernetes master.")


# Configure logging
def setup_logging(debug: bool = False):
    """Configure logging based on debug mode."""
    log_level = logging.DEBUG if debug else getattr(logging, Config.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format=Config.LOG_FORMAT,
        handlers=[
            logging.StreamHandler()
        ]
    )
    logging.getLogger().setLevel(log_level)
    # Disable debug logging for noisy libraries
    if not debug:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('kubernetes').setLevel(logging.WARNING)


# Add all command groups
app.add_typer(bootstrap.app, name="bootstrap")
app.add_typer(kubectl.app, name="kubectl")
app.add_typer(certs.app, name="certs")
app.add_typer(kubeconfig.app, name="kubeconfig")
app.command("detect")(status.detect)
app.command("check")(status.check)
app.command("doctor")(status.doctor)


# Global options callback
@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """kubeboot - kubectl bootstrap CLI."""
    setup_logging(debug)
    if debug:
        logging.debug("Debug mode enabled")
