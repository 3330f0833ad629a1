"""
Bottom navigation bar for BrestTrans.
"""

from typing import Callable

from kivy.uix.boxlayout import BoxLayout
from kivy.uix.togglebutton import ToggleButton

TABS = [
    ("collect", "Сбор данных"),
    ("history", "История"),
    ("profile", "Профиль"),
]


class NavBar(BoxLayout):
    """Row of tab buttons; exactly one is selected."""

    def __init__(self, on_select: Callable[[str], None], **kwargs):
        kwargs.setdefault("orientation", "horizontal")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", 60)
        kwargs.setdefault("spacing", 2)
        super().__init__(**kwargs)

        self.on_select = on_select
        self._buttons: dict[str, ToggleButton] = {}

        for route, label in TABS:
            btn = ToggleButton(text=label, group="nav", allow_no_selection=False, font_size="14sp")
            btn.bind(on_press=lambda b, r=route: self.on_select(r))
            self._buttons[route] = btn
            self.add_widget(btn)

    def select(self, route: str) -> None:
        for name, btn in self._buttons.items():
            btn.state = "down" if name == route else "normal"
