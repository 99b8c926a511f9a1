from .loader import load_config
from .models import AnnovateConfig, DisplayConfig

__all__ = [
    "AnnovateConfig",
    "DisplayConfig",
    "load_config",
]
