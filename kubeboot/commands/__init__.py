from . import bootstrap, certs, kubeconfig, kubectl, status

__all__ = ['bootstrap', 'certs', 'kubeconfig', 'kubectl', 'status']
