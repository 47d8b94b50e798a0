"""
The bootstrap pipeline: detect → download → copy certificates → configure → check.
"""
import logging
from datetime import date
from typing import Callable, List, Optional, Tuple

from ..config import BootstrapSettings
from ..errors import KubebootError
from .certs import copy_certificates
from .connectivity import check_connectivity
from .detect import detect_target
from .fetcher import download_kubectl, resolve_release, select_transfer_tool
from .kubeconfig import configure_kubectl
from .kubectl import Kubectl
from .models import BootstrapPhase, BootstrapState, TargetPair
from .runner import CommandRunner

logger = logging.getLogger("kubeboot.pipeline")

Stage = Tuple[BootstrapPhase, str, Callable[[], None]]


class BootstrapPipeline:
    """Runs the five bootstrap stages in order, stopping at the first error.

    Args:
        settings: Resolved settings for this run
        runner: Command runner; defaults to one honouring settings.dry_run
        system: OS name override, for detection on behalf of another host
        machine: Machine name override
        today: Date used to name the kubeconfig backup
    """

    def __init__(
        self,
        settings: BootstrapSettings,
        runner: Optional[CommandRunner] = None,
        system: Optional[str] = None,
        machine: Optional[str] = None,
        today: Optional[date] = None
    ):
        self.settings = settings
        self.runner = runner or CommandRunner(dry_run=settings.dry_run)
        self.system = system
        self.machine = machine
        self.today = today
        self.state = BootstrapState()
        self.target: Optional[TargetPair] = None

    @property
    def kubectl(self) -> Kubectl:
        return Kubectl(self.settings.install_path, self.settings.kubeconfig, self.runner)

    def stages(self) -> List[Stage]:
        return [
            (BootstrapPhase.DETECTING_PLATFORM, "Detect client machine information...", self._detect),
            (BootstrapPhase.DOWNLOADING_KUBECTL, "Download kubectl binary...", self._download),
            (BootstrapPhase.COPYING_CERTIFICATES, "Copy Kubernetes certificate...", self._copy_certificates),
            (BootstrapPhase.CONFIGURING_KUBECTL, "Configure kubectl to access the cluster...", self._configure),
            (BootstrapPhase.CHECKING_CONNECTIVITY, "Check connectivity to the cluster...", self._check),
        ]

    def run(self) -> BootstrapState:
        """Run every stage.

        Raises:
            KubebootError: From the first stage that fails; later stages don't run
        """
        for phase, title, action in self.stages():
            self.state.update_phase(phase)
            logger.info(title)
            try:
                action()
            except KubebootError as e:
                self.state.fail(str(e))
                raise
            self.state.complete_phase()

        self.state.update_phase(BootstrapPhase.COMPLETED)
        logger.info(f"✅ kubectl configured for {self.settings.master} (context {self.settings.context_name})")
        return self.state

    def _detect(self) -> None:
        self.target = detect_target(self.system, self.machine)
        logger.info(f"Kubernetes Control over: {self.target}")

    def _download(self) -> None:
        # Tool check first: no network traffic on a host that cannot download.
        tool = select_transfer_tool(self.runner.which)
        release = resolve_release(self.settings.release, self.settings.release_base_url)
        self.settings = self.settings.with_release(release)
        download_kubectl(self.settings, self.target, self.runner, tool)

    def _copy_certificates(self) -> None:
        copy_certificates(self.settings, self.runner)

    def _configure(self) -> None:
        configure_kubectl(self.settings, self.kubectl, self.today)

    def _check(self) -> None:
        check_connectivity(self.kubectl)
