"""
Transient notice widget for BrestTrans.

Shows a short message near the bottom of the screen and hides it after a
few seconds. Safe to call from any thread.
"""

import logging

from kivy.clock import Clock
from kivy.graphics import Color, RoundedRectangle
from kivy.uix.label import Label

logger = logging.getLogger(__name__)


class Toast(Label):
    """Semi-transparent message bubble."""

    def __init__(self, duration: float = 2.5, **kwargs):
        kwargs.setdefault("size_hint", (0.9, None))
        kwargs.setdefault("height", 60)
        kwargs.setdefault("pos_hint", {"center_x": 0.5, "y": 0.12})
        kwargs.setdefault("font_size", "15sp")
        kwargs.setdefault("halign", "center")
        kwargs.setdefault("valign", "middle")
        kwargs.setdefault("opacity", 0)
        super().__init__(**kwargs)

        self.duration = duration
        self._hide_event = None

        self.bind(size=self.setter("text_size"))
        with self.canvas.before:
            Color(0, 0, 0, 0.75)
            self._bg_rect = RoundedRectangle(pos=self.pos, size=self.size, radius=[12])
        self.bind(pos=self._update_background, size=self._update_background)

    def _update_background(self, *args):
        self._bg_rect.pos = self.pos
        self._bg_rect.size = self.size

    def show(self, message: str) -> None:
        """Display a message; may be called from worker threads."""
        Clock.schedule_once(lambda dt: self._show(message), 0)

    def _show(self, message: str) -> None:
        logger.info(f"Notice: {message}")
        self.text = message
        self.opacity = 1
        if self._hide_event is not None:
            self._hide_event.cancel()
        self._hide_event = Clock.schedule_once(self._hide, self.duration)

    def _hide(self, dt):
        self.opacity = 0
        self._hide_event = None
