"""Final check that the configured kubectl can reach the cluster."""
import logging

from .kubectl import Kubectl

logger = logging.getLogger("kubeboot.connectivity")


def check_connectivity(kubectl: Kubectl) -> None:
    """List the cluster nodes; output goes straight to the operator.

    Raises:
        CommandError: With kubectl's exit code if the listing fails
    """
    logger.info("Check kubectl configuration and connection")
    kubectl.run("get", "nodes")
