"""UI components for VidScroll."""

from .main_window import VidScrollApp
from .result_row import ResultRow
from .settings_window import SettingsWindow

__all__ = ["VidScrollApp", "ResultRow", "SettingsWindow"]
