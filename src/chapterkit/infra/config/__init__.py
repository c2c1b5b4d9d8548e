"""
Unified interface for loading and adapting configuration files.
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "copy_default_config",
    "find_config_file",
    "load_config",
    "save_config_file",
    "ConfigAdapter",
]

from .adapter import ConfigAdapter
from .file_io import (
    CONFIG_ENV_VAR,
    copy_default_config,
    find_config_file,
    load_config,
    save_config_file,
)
