"""Configuration management for kubeboot."""
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from jsonschema import ValidationError, validate

from .errors import ProfileError, SettingsError

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_RELEASE_URL = "https://storage.googleapis.com/kubernetes-release/release"
DEFAULT_RELEASE = "v1.4.3"
DEFAULT_MASTER = "localhost:443"


class Config:
    """Process-wide settings with sensible defaults."""

    # Timeouts (in seconds)
    API_TIMEOUT: int = int(os.getenv("API_TIMEOUT", "30"))
    COMMAND_TIMEOUT: int = int(os.getenv("COMMAND_TIMEOUT", "600"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


# Maps BootstrapSettings fields to their environment variables.
ENV_VARS: Dict[str, str] = {
    "release": "KUBEBOOT_RELEASE",
    "release_base_url": "KUBEBOOT_RELEASE_URL",
    "master": "KUBEBOOT_MASTER_HOST",
    "ca_cert": "KUBEBOOT_CA_CERT",
    "admin_cert": "KUBEBOOT_ADMIN_CERT",
    "admin_key": "KUBEBOOT_ADMIN_KEY",
    "kubeconfig": "KUBEBOOT_KUBECONFIG",
    "install_path": "KUBEBOOT_INSTALL_PATH",
    "remote_user": "KUBEBOOT_REMOTE_USER",
    "remote_cert_dir": "KUBEBOOT_REMOTE_CERT_DIR",
    "local_cert_dir": "KUBEBOOT_LOCAL_CERT_DIR",
    "ssh_port": "KUBEBOOT_SSH_PORT",
    "ssh_key": "KUBEBOOT_SSH_KEY",
    "cluster_name": "KUBEBOOT_CLUSTER_NAME",
    "user_name": "KUBEBOOT_USER_NAME",
    "context_name": "KUBEBOOT_CONTEXT_NAME",
    "verify_checksum": "KUBEBOOT_VERIFY_CHECKSUM",
}

PROFILE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "release": {"type": "string"},
        "release_base_url": {"type": "string"},
        "master": {"type": "string", "minLength": 1},
        "ca_cert": {"type": "string"},
        "admin_cert": {"type": "string"},
        "admin_key": {"type": "string"},
        "kubeconfig": {"type": "string"},
        "install_path": {"type": "string"},
        "remote_user": {"type": "string", "minLength": 1},
        "remote_cert_dir": {"type": "string"},
        "local_cert_dir": {"type": "string"},
        "ssh_port": {"type": "integer", "minimum": 1, "maximum": 65535},
        "ssh_key": {"type": "string"},
        "cluster_name": {"type": "string", "minLength": 1},
        "user_name": {"type": "string", "minLength": 1},
        "context_name": {"type": "string", "minLength": 1},
        "verify_checksum": {"type": "boolean"},
    },
    "additionalProperties": False,
}

_PATH_FIELDS = (
    "ca_cert", "admin_cert", "admin_key", "kubeconfig",
    "install_path", "local_cert_dir", "ssh_key",
)


@dataclass(frozen=True)
class BootstrapSettings:
    """Everything one bootstrap run needs, resolved once up front."""
    release: str = DEFAULT_RELEASE
    release_base_url: str = DEFAULT_RELEASE_URL
    master: str = DEFAULT_MASTER
    ca_cert: Path = Path("~/.kube/ca.crt")
    admin_cert: Path = Path("~/.kube/kubecfg.crt")
    admin_key: Path = Path("~/.kube/kubecfg.key")
    kubeconfig: Path = Path("~/.kube/config")
    install_path: Path = Path("/usr/local/bin/kubectl")
    remote_user: str = "root"
    remote_cert_dir: str = "/etc/kubernetes/certs"
    local_cert_dir: Path = Path("~/.kube")
    ssh_port: int = 22
    ssh_key: Optional[Path] = None
    cluster_name: str = "default-cluster"
    user_name: str = "default-admin"
    context_name: str = "default-system"
    verify_checksum: bool = False
    dry_run: bool = False

    def __post_init__(self):
        for name in _PATH_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, Path(os.path.expanduser(str(value))))

    @classmethod
    def load(cls, profile: Optional[str] = None, **overrides: Any) -> "BootstrapSettings":
        """Build settings from environment, an optional profile and CLI overrides.

        Later sources win: defaults < environment < profile < overrides.
        Overrides whose value is None are ignored so unset CLI options fall through.
        """
        values: Dict[str, Any] = {}
        values.update(settings_from_env())
        if profile:
            values.update(load_profile(profile))
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_release(self, release: str) -> "BootstrapSettings":
        return replace(self, release=release)


def _coerce(name: str, raw: str) -> Any:
    if name == "ssh_port":
        try:
            port = int(raw)
        except ValueError:
            raise SettingsError(f"{ENV_VARS[name]} must be an integer, got {raw!r}") from None
        if not 1 <= port <= 65535:
            raise SettingsError(f"{ENV_VARS[name]} must be between 1 and 65535, got {port}")
        return port
    if name == "verify_checksum":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return raw


def settings_from_env() -> Dict[str, Any]:
    """Collect the BootstrapSettings values set in the environment.

    Raises:
        SettingsError: If a variable cannot be converted to its setting
    """
    values = {}
    for name, env_var in ENV_VARS.items():
        raw = os.getenv(env_var)
        if raw:
            values[name] = _coerce(name, raw)
    return values


def load_profile(path: str) -> Dict[str, Any]:
    """Read and validate a YAML profile.

    Raises:
        ProfileError: If the file is missing, not YAML, or fails the schema
    """
    resolved = Path(os.path.expanduser(path))
    if not resolved.exists():
        raise ProfileError(f"Profile not found: {resolved}")
    try:
        with open(resolved, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ProfileError(f"Invalid YAML in profile {resolved}: {e}") from e

    try:
        validate(instance=data, schema=PROFILE_SCHEMA)
    except ValidationError as e:
        raise ProfileError(f"Profile {resolved} is invalid: {e.message}") from e
    return data
