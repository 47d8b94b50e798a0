"""kubeboot - bootstrap a local kubectl against a remote Kubernetes master."""

__version__ = "0.1.0"
