from .build_config import BuildConfig
from .family import HoppingFamily

__all__ = ["HoppingFamily", "BuildConfig"]
