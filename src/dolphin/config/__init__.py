from dolphin.config.loader import CONFIG_PATH_ENVS, default_config_candidates, load_config
from dolphin.config.models import ClusterConfig, DefaultsConfig, DolphinConfig, ResolvedConfig

__all__ = [
    "CONFIG_PATH_ENVS",
    "ClusterConfig",
    "DefaultsConfig",
    "DolphinConfig",
    "ResolvedConfig",
    "default_config_candidates",
    "load_config",
]
