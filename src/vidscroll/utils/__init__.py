"""Utility functions and classes for VidScroll."""

from .config import Config
from .logging import log_error

__all__ = ["Config", "log_error"]
