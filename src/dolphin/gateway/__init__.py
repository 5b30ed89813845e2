from dolphin.gateway.base import ClusterGateway
from dolphin.gateway.kube import KubernetesGateway, load_gateway

__all__ = ["ClusterGateway", "KubernetesGateway", "load_gateway"]
