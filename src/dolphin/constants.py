from __future__ import annotations

NODE_NOT_GIVEN = "N/A"

CONTROL_PLANE_LABEL = "node-role.kubernetes.io/control-plane"
LEGACY_MASTER_LABEL = "node-role.kubernetes.io/master"
CONTROL_PLANE_LABELS = frozenset({CONTROL_PLANE_LABEL, LEGACY_MASTER_LABEL})

SYSTEM_NAMESPACES = frozenset({"kube-system", "kube-public", "kube-node-lease"})

DEFAULT_NAMESPACE = "default"
DEFAULT_BATCH_SIZE = 1
DEFAULT_INTERVAL_SECONDS = 0.0

DEFAULT_CONFIG_DIR = "~/.config/dolphin"
DEFAULT_KUBECONFIG = "~/.kube/config"

SUCCESS_MESSAGE = "Operation completed successfully!"
HELP_HINT = "See 'kubectl dolphin -h' for help and examples."
