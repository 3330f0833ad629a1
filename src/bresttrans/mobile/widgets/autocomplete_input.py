"""
Text field with debounced stop-name suggestions.
"""

import logging
from typing import Callable, Iterable

from kivy.clock import Clock
from kivy.uix.boxlayout import BoxLayout
from kivy.uix.button import Button
from kivy.uix.dropdown import DropDown
from kivy.uix.textinput import TextInput

from ...core.debounce import DEFAULT_DELAY, SuggestionFilter

logger = logging.getLogger(__name__)


class AutoCompleteInput(BoxLayout):
    """
    TextInput that offers matching options after typing pauses.

    Each keystroke restarts the debounce timer; when it fires the options
    are filtered by case-insensitive substring and shown in a dropdown.
    """

    def __init__(
        self,
        hint_text: str,
        options: Callable[[], Iterable[str]],
        on_text: Callable[[str], None] | None = None,
        delay: float = DEFAULT_DELAY,
        **kwargs,
    ):
        """
        Initialize the field.

        Args:
            hint_text: Placeholder shown while empty.
            options: Returns the current option list.
            on_text: Called with the text after every change.
            delay: Debounce delay in seconds.
        """
        kwargs.setdefault("orientation", "vertical")
        kwargs.setdefault("size_hint_y", None)
        kwargs.setdefault("height", 50)
        super().__init__(**kwargs)

        self.on_text = on_text
        self._selecting = False

        self.text_input = TextInput(hint_text=hint_text, multiline=False, font_size="16sp")
        self.text_input.bind(text=self._on_text_changed)
        self.add_widget(self.text_input)

        self.dropdown = DropDown()
        self._filter = SuggestionFilter(
            options=options,
            on_suggestions=lambda items: Clock.schedule_once(
                lambda dt: self._show_suggestions(items), 0
            ),
            delay=delay,
        )

    @property
    def text(self) -> str:
        return self.text_input.text

    @text.setter
    def text(self, value: str) -> None:
        self.text_input.text = value

    def _on_text_changed(self, instance, value):
        if self.on_text:
            self.on_text(value)
        if self._selecting:
            return
        self._filter.text_changed(value)

    def _show_suggestions(self, items: list[str]) -> None:
        self.dropdown.dismiss()
        self.dropdown.clear_widgets()
        if not items:
            return

        for item in items:
            btn = Button(text=item, size_hint_y=None, height=44, font_size="14sp")
            btn.bind(on_release=lambda b: self._select(b.text))
            self.dropdown.add_widget(btn)

        if self.get_root_window() is not None:
            self.dropdown.open(self.text_input)

    def _select(self, value: str) -> None:
        self._selecting = True
        self.text_input.text = value
        self._selecting = False
        self.dropdown.dismiss()

    def close(self) -> None:
        """Stop pending suggestion work when the screen goes away."""
        self._filter.cancel()
        self.dropdown.dismiss()
