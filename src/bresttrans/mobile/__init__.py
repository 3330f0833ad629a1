"""
BrestTrans Mobile - Cross-platform Kivy UI for ridership surveys.

This module provides a Kivy-based user interface that works on:
- Desktop (Windows, macOS, Linux)
- Mobile (Android)

Features:
- Registration and profile with a linked Google Drive folder
- Record entry with stop suggestions and automatic weather
- Session history with CSV export and Drive upload
"""

from .app import BrestTransApp

__all__ = ["BrestTransApp"]
