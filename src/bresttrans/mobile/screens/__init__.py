"""Screen modules for BrestTrans mobile UI."""

from .collect_screen import CollectScreen
from .history_screen import HistoryScreen
from .profile_screen import ProfileScreen, RegistrationScreen

__all__ = ["CollectScreen", "HistoryScreen", "ProfileScreen", "RegistrationScreen"]
