"""Directory list configuration."""

from .loader import DirectoryConfigError, DirectoryLoader, load_directories
from .models import DirectoryConfig

__all__ = [
    "DirectoryConfig",
    "DirectoryConfigError",
    "DirectoryLoader",
    "load_directories",
]
