"""Data models for the kubeboot pipeline."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass(frozen=True)
class TargetPair:
    """Platform/architecture pair a kubectl build is published for."""
    platform: str  # 'darwin' or 'linux'
    arch: str  # 'amd64' or '386'

    def __str__(self) -> str:
        return f"{self.platform}/{self.arch}"


class BootstrapPhase(str, Enum):
    """Phases of a bootstrap run, in execution order."""
    NOT_STARTED = 'not_started'
    DETECTING_PLATFORM = 'detecting_platform'
    DOWNLOADING_KUBECTL = 'downloading_kubectl'
    COPYING_CERTIFICATES = 'copying_certificates'
    CONFIGURING_KUBECTL = 'configuring_kubectl'
    CHECKING_CONNECTIVITY = 'checking_connectivity'
    COMPLETED = 'completed'
    FAILED = 'failed'


@dataclass
class BootstrapState:
    """Tracks the progress of a bootstrap run."""
    phase: BootstrapPhase = BootstrapPhase.NOT_STARTED
    completed: List[BootstrapPhase] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    def update_phase(self, phase: BootstrapPhase) -> None:
        """Update the current phase."""
        self.phase = phase

    def complete_phase(self) -> None:
        """Mark the current phase as done."""
        self.completed.append(self.phase)

    def fail(self, error: str) -> None:
        """Record an error; the failed phase stays out of `completed`."""
        self.errors.append(f"{self.phase.value}: {error}")
        self.phase = BootstrapPhase.FAILED
