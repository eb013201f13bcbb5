from .loader import load_config
from .log import configure_logging
from .models import (
    BenchConfig,
    FsGuardConfig,
    HashingConfig,
    ScanConfig,
)

__all__ = [
    "BenchConfig",
    "FsGuardConfig",
    "HashingConfig",
    "ScanConfig",
    "configure_logging",
    "load_config",
]
