from pathlib import Path
from typing import Any, Dict, Optional

from kubernetes import client, config
from kubernetes.client.rest import ApiException


def check_kube_context(config_file: Optional[Path] = None):
    try:
        contexts, active_context = config.list_kube_config_contexts(
            config_file=str(config_file) if config_file else None
        )
        return active_context['name']
    except Exception as e:
        return {"error": f"Failed to load kubeconfig: {e}"}


def check_nodes(config_file: Optional[Path] = None):
    try:
        config.load_kube_config(config_file=str(config_file) if config_file else None)
    except Exception as e:
        return {"error": f"Failed to load kubeconfig: {e}"}
    v1 = client.CoreV1Api()
    try:
        nodes = v1.list_node().items
        return [{
            "name": node.metadata.name,
            "status": [s.type for s in (node.status.conditions or []) if s.status == "True"]
        } for node in nodes]
    except ApiException as e:
        return {"error": str(e)}
    except Exception as e:
        return {"error": f"Cannot reach the cluster: {e}"}


def run(config_file: Optional[Path] = None) -> Dict[str, Any]:
    context = check_kube_context(config_file)
    nodes = check_nodes(config_file)
    healthy = not isinstance(context, dict) and not isinstance(nodes, dict)
    return {
        "kube_context": context,
        "nodes": nodes,
        "healthy": healthy
    }
