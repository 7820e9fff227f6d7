from .loader import load_global_config
from .model import DatasetConfig, GlobalConfig

__all__ = ["load_global_config", "DatasetConfig", "GlobalConfig"]
