from .loader import LOCAL_CONFIG_PATH, load_config, load_default_config, merge_config, write_default_config

__all__ = [
    "LOCAL_CONFIG_PATH",
    "load_config",
    "load_default_config",
    "merge_config",
    "write_default_config",
]
